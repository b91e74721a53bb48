"""
Tests for SpecifierVisitor over real tree-sitter trees.
"""

import os

import pytest

from esmify.exceptions import ParsingError
from esmify.models import FileIndex, SpecifierKind
from esmify.parser import SourceParser, dialect_for
from esmify.resolvers import TypeScriptResolver
from esmify.serializer import serialize
from esmify.visitor import SpecifierVisitor


ROOT = os.path.abspath(os.path.join(os.sep, "proj"))

INDEX = FileIndex.from_paths(ROOT, [
    os.path.join(ROOT, "a.ts"),
    os.path.join(ROOT, "b.ts"),
    os.path.join(ROOT, "types.d.ts"),
    os.path.join(ROOT, "Button.tsx"),
    os.path.join(ROOT, "lib", "index.ts"),
])


def _rewrite(code, file_name="main.ts", jsx=False):
    file_path = os.path.join(ROOT, file_name)
    source = code.encode("utf-8")
    tree = SourceParser().parse(file_path, source)
    visited = SpecifierVisitor(TypeScriptResolver(INDEX, jsx=jsx)).visit(tree, source, file_path)
    return serialize(source, visited.edits), visited


def test_static_import_is_rewritten():
    output, visited = _rewrite("import { a } from './a';\n")
    assert output == "import { a } from './a.js';\n"
    assert visited.changed
    assert visited.specifiers[0].kind == SpecifierKind.IMPORT


def test_side_effect_and_type_only_imports():
    code = 'import "./a";\nimport type { T } from "./types";\n'
    output, _ = _rewrite(code)
    assert output == 'import "./a.js";\nimport type { T } from "./types.js";\n'


def test_export_from_is_rewritten():
    code = "export * from './a';\nexport { b } from './b';\nexport * as lib from './lib';\n"
    output, visited = _rewrite(code)
    assert output == ("export * from './a.js';\nexport { b } from './b.js';\n"
                      "export * as lib from './lib/index.js';\n")
    assert {s.kind for s in visited.specifiers} == {SpecifierKind.EXPORT}


def test_local_export_is_not_visited():
    output, visited = _rewrite("const a = 1;\nexport { a };\nexport const b = './b';\n")
    assert not visited.specifiers
    assert not visited.changed


def test_dynamic_import_is_rewritten():
    code = "async function load() {\n  return await import('./a');\n}\n"
    output, visited = _rewrite(code)
    assert "import('./a.js')" in output
    assert visited.specifiers[0].kind == SpecifierKind.DYNAMIC_IMPORT


def test_dynamic_import_skips_leading_comment():
    code = "const m = import(/* chunk */ './a');\n"
    output, _ = _rewrite(code)
    assert output == "const m = import(/* chunk */ './a.js');\n"


def test_dynamic_import_with_expression_is_untouched():
    code = "const name = './a';\nconst m = import(name);\nconst n = import(`./${name}`);\n"
    output, visited = _rewrite(code)
    assert output == code
    assert not visited.specifiers


def test_import_type_reference_is_rewritten():
    code = "type A = typeof import('./a');\n"
    output, visited = _rewrite(code)
    assert output == "type A = typeof import('./a.js');\n"
    assert visited.specifiers[0].kind == SpecifierKind.IMPORT_TYPE


def test_typeof_import_yields_a_single_edit():
    code = "import { a } from './a';\ntype A = typeof import('./a');\n"
    output, visited = _rewrite(code)
    assert output == "import { a } from './a.js';\ntype A = typeof import('./a.js');\n"
    assert len(visited.edits) == 2
    assert [s.kind for s in visited.specifiers] == [SpecifierKind.IMPORT, SpecifierKind.IMPORT_TYPE]


def test_import_type_member_in_type_alias():
    code = "type B = import('./b').Foo;\n"
    output, visited = _rewrite(code)
    assert output == "type B = import('./b.js').Foo;\n"
    assert len(visited.edits) == 1
    assert visited.specifiers[0].kind == SpecifierKind.IMPORT_TYPE


def test_import_type_member_in_annotation():
    code = "let x: import('./a').T;\n"
    output, visited = _rewrite(code)
    assert output == "let x: import('./a.js').T;\n"
    assert len(visited.edits) == 1
    assert visited.specifiers[0].kind == SpecifierKind.IMPORT_TYPE


def test_deeply_nested_expression_is_walked():
    terms = " + ".join(["a"] * 1500)
    code = f"import {{ a }} from './a';\nexport const s = {terms};\n"
    output, visited = _rewrite(code)
    assert output.startswith("import { a } from './a.js';\n")
    assert len(visited.edits) == 1


def test_other_calls_and_strings_are_untouched():
    code = "const x = require('./a');\nconsole.log('./b');\n"
    output, visited = _rewrite(code)
    assert output == code
    assert not visited.specifiers


def test_quote_style_and_comments_are_preserved():
    code = ('// header\n'
            'import {\n'
            '  a, // first\n'
            '} from "./a"; /* trailing */\n')
    output, _ = _rewrite(code)
    assert output == code.replace('"./a"', '"./a.js"')


def test_tsx_file_with_jsx_flag():
    code = "import { Button } from './Button';\nexport const App = () => <Button />;\n"
    output, _ = _rewrite(code, file_name="App.tsx", jsx=True)
    assert "from './Button.jsx'" in output
    assert "<Button />" in output


def test_angle_bracket_cast_parses_in_ts_file():
    code = "import { a } from './a';\nconst n = <number>a;\n"
    output, _ = _rewrite(code)
    assert output.startswith("import { a } from './a.js';")


def test_non_ascii_content_keeps_offsets():
    code = "const greeting = 'héllo wörld';\nimport { a } from './a';\n"
    output, _ = _rewrite(code)
    assert output == "const greeting = 'héllo wörld';\nimport { a } from './a.js';\n"


def test_specifier_line_numbers():
    _, visited = _rewrite("\n\nimport { a } from './a';\n")
    assert visited.specifiers[0].line_number == 3


def test_syntax_error_raises_parsing_error():
    with pytest.raises(ParsingError) as exc_info:
        _rewrite("import { a } from './a';\nexport const x = ;\n")
    assert exc_info.value.line == 2
    assert str(exc_info.value).startswith(f"{os.path.join(ROOT, 'main.ts')}:2: ")


def test_dialect_for():
    assert dialect_for("/x/a.tsx") == "tsx"
    assert dialect_for("/x/a.ts") == "typescript"
    assert dialect_for("/x/a.d.ts") == "typescript"
