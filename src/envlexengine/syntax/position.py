"""Position utilities for .env source text.

Helpers for turning a 1-based line number into a readable source excerpt
for error reporting.
"""


def get_line_content(source: str, line_number: int) -> str:
    """Extract the content of a specific 1-based line.

    Args:
        source: Complete .env source text (LF line endings)
        line_number: Line number to extract (1-indexed)

    Returns:
        Content of the line (without trailing newline)

    Raises:
        ValueError: If line_number is outside the source

    Example:
        >>> get_line_content("A=1\\nB=2", 2)
        'B=2'
    """
    lines = source.split("\n")
    if not 1 <= line_number <= len(lines):
        msg = f"Line {line_number} out of range (source has {len(lines)} lines)"
        raise ValueError(msg)
    return lines[line_number - 1]


def get_error_context(
    source: str, line_number: int, context_lines: int = 2, marker: str = ">"
) -> str:
    """Get formatted error context around a 1-based line.

    Shows the error line, prefixed with marker, and up to context_lines
    lines on each side, each numbered.

    Args:
        source: Complete .env source text (LF line endings)
        line_number: Line of the error (1-indexed)
        context_lines: Number of lines to show before/after the error line
        marker: Single character placed before the error line

    Returns:
        Formatted error context string

    Example:
        >>> print(get_error_context("A=1\\nB\\nC=3\\nD=4", 2, context_lines=1))
           1 | A=1
        >  2 | B
           3 | C=3
    """
    lines = source.split("\n")

    start_line = max(1, line_number - context_lines)
    end_line = min(len(lines), line_number + context_lines)

    context = []
    for i in range(start_line, end_line + 1):
        prefix = marker if i == line_number else " "
        context.append(f"{prefix}{i:3} | {lines[i - 1]}")

    return "\n".join(context)
