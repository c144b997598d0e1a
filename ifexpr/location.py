"""Short source-location labels used in diagnostics."""

from __future__ import annotations


def format_location(line: int | None, column: int | None = None) -> str:
    """Render a start position as ``L<line>`` or ``L<line>C<column>``.

    A missing line yields an empty label.  Column ``0`` is dropped, so a
    chain starting at the beginning of a line is labelled ``L<line>``.
    """
    if not line:
        return ""
    if not column:
        return f"L{line}"
    return f"L{line}C{column}"
