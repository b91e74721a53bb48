import json

import pytest

from esmify import cli


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


def test_no_folder_prints_usage(capsys):
    assert cli.main([]) == cli.EXIT_OK
    assert "usage: esmify" in capsys.readouterr().out


def test_two_folders_prints_usage(capsys, tmp_path):
    assert cli.main([str(tmp_path), str(tmp_path)]) == cli.EXIT_OK
    assert "usage: esmify" in capsys.readouterr().out


def test_rewrites_folder_relative_to_cwd(make_project, monkeypatch, capsys):
    root = make_project({
        "src/main.ts": "import { a } from './a';\n",
        "src/a.ts": "export const a = 1;\n",
    })
    monkeypatch.chdir(root)

    assert cli.main(["src", "-w", "1"]) == cli.EXIT_OK

    assert (root / "src" / "main.ts").read_text() == "import { a } from './a.js';\n"
    assert "Rewrote 1 of 2 files (0 failed)" in capsys.readouterr().out


def test_jsx_flag(make_project):
    root = make_project({
        "main.ts": "import { B } from './B';\n",
        "B.tsx": "export const B = 1;\n",
    })

    cli.main([str(root), "--jsx", "--workers", "1"])

    assert (root / "main.ts").read_text() == "import { B } from './B.jsx';\n"


def test_bad_prettier_config_aborts_before_rewriting(make_project, capsys):
    root = make_project({
        "main.ts": "import { a } from './a';\n",
        "a.ts": "export const a = 1;\n",
    })

    assert cli.main([str(root), "-p", str(root / "missing.json")]) == cli.EXIT_STARTUP_ERROR

    assert (root / "main.ts").read_text() == "import { a } from './a';\n"
    assert "missing.json" in capsys.readouterr().err


def test_prettier_config_is_loaded(make_project, monkeypatch):
    root = make_project({"a.ts": "export const a = 1;\n"})
    (root / "prettier.json").write_text(json.dumps({"semi": False}))
    captured = {}

    class FakeRewriter:
        def __init__(self, config):
            captured["config"] = config

        def rewrite(self, folder):
            from esmify.models import RunResult
            return RunResult(root=folder)

    monkeypatch.setattr(cli, "ImportRewriter", FakeRewriter)
    monkeypatch.chdir(root)

    assert cli.main([".", "--prettier", "prettier.json"]) == cli.EXIT_OK
    assert captured["config"].prettier_options == {"semi": False, "parser": "typescript"}


def test_missing_folder_is_startup_error(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing")]) == cli.EXIT_STARTUP_ERROR
    assert "Invalid project" in capsys.readouterr().err


def test_file_failure_exit_code(make_project):
    root = make_project({"broken.ts": "export const x = ;\n"})
    assert cli.main([str(root), "-w", "1"]) == cli.EXIT_FILE_FAILURES
