"""
Tile Pattern Learning - Hex String Utilities

Utilities for parsing and formatting the hex rows used in map files.
Tilesets hold up to 1024 tiles, so tile rows may need three hex digits.
"""

from typing import List


def hex_width(rows: List[List[int]]) -> int:
    """
    Number of hex digits needed to format every value in the rows.

    Args:
        rows: 2D list of non-negative integers

    Returns:
        2 for byte-sized values, 3 when any value exceeds 0xFF

    Example:
        >>> hex_width([[1, 2], [0x3FF]])
        3
    """
    largest = max((max(row) for row in rows if row), default=0)
    return 3 if largest > 0xFF else 2


def parse_hex_row(row_str: str) -> List[int]:
    """
    Parse space-separated hex string to list of integers.

    Args:
        row_str: Space-separated hex string (e.g., "01 02 A3 3FF")

    Returns:
        List of integer values

    Example:
        >>> parse_hex_row("01 02 A3 3FF")
        [1, 2, 163, 1023]
    """
    return [int(x, 16) for x in row_str.split()]


def format_hex_row(row: List[int], width: int = 2) -> str:
    """
    Format list of integers as space-separated hex string.

    Args:
        row: List of integers
        width: Minimum number of hex digits per value

    Returns:
        Space-separated uppercase hex string

    Example:
        >>> format_hex_row([1, 2, 163, 255])
        '01 02 A3 FF'
    """
    return " ".join(f"{value:0{width}X}" for value in row)


def parse_hex_rows(rows: List[str]) -> List[List[int]]:
    """Parse multiple hex rows."""
    return [parse_hex_row(row) for row in rows]


def format_hex_rows(rows: List[List[int]]) -> List[str]:
    """
    Format multiple rows as hex strings with a shared digit width.

    Args:
        rows: 2D list of integers

    Returns:
        List of space-separated hex strings
    """
    width = hex_width(rows)
    return [format_hex_row(row, width) for row in rows]
