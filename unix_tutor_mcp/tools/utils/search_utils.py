from typing import List


def split_content(content: str) -> List[str]:
    """Split file content into display lines. Empty content has no lines."""
    if not content:
        return []
    return content.split("\n")


def search_lines(content: str, pattern: str) -> List[str]:
    """
    Literal substring search over the lines of a file.

    The pattern is never compiled as a regular expression, so characters
    like "." or "*" only match themselves.

    Args:
        content: The file content to search
        pattern: The literal text to look for

    Returns:
        Matching lines, verbatim and in file order
    """
    return [line for line in split_content(content) if pattern in line]
