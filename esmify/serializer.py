"""
Round-trip serialization of rewritten sources.

Edits are spliced into the original bytes at the offsets tree-sitter
reported, so every byte outside a replaced specifier (blank lines,
comments, indentation, quote style) is carried over exactly.
"""

from typing import Iterable

from .models import Edit


def apply_edits(source: bytes, edits: Iterable[Edit]) -> bytes:
    """Apply byte-range edits to the original source.

    Args:
        source: Original file contents
        edits: Non-overlapping replacements, in any order

    Returns:
        The rewritten contents

    Raises:
        ValueError: if two edits overlap or an edit falls outside the source
    """
    ordered = sorted(edits, key=lambda e: e.start_byte)

    previous_end = 0
    for edit in ordered:
        if edit.start_byte < previous_end:
            raise ValueError(f"Overlapping edits at byte {edit.start_byte}")
        if edit.end_byte < edit.start_byte or edit.end_byte > len(source):
            raise ValueError(f"Edit [{edit.start_byte}, {edit.end_byte}) outside source of {len(source)} bytes")
        previous_end = edit.end_byte

    result = bytearray(source)
    # Back to front so earlier offsets stay valid
    for edit in reversed(ordered):
        result[edit.start_byte:edit.end_byte] = edit.replacement.encode('utf-8')
    return bytes(result)


def serialize(source: bytes, edits: Iterable[Edit]) -> str:
    """Apply edits and decode the result as UTF-8 text."""
    return apply_edits(source, edits).decode('utf-8')
