"""
Tile Pattern Learning - Pattern Signatures

A signature is the store key for a (center terrain, neighbor context) pair.
The context is the 8 surrounding terrain ids in fixed position order.
"""

import operator
from typing import Sequence, Tuple

CONTEXT_SIZE = 8

# Position order of the neighbor context. Never reordered.
NEIGHBOR_POSITIONS = ("NW", "N", "NE", "W", "E", "SW", "S", "SE")

# (row, col) offsets matching NEIGHBOR_POSITIONS
NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)

SIGNATURE_DELIMITER = ":"


class InvalidContext(ValueError):
    """Raised when a neighbor context is not exactly 8 integer terrain ids."""

    def __init__(self, length: int, detail: str = ""):
        self.length = length
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.length == CONTEXT_SIZE and self.detail:
            return f"Invalid neighbor context: {self.detail}"
        message = f"Neighbor context must have {CONTEXT_SIZE} entries, got {self.length}"
        if self.detail:
            message += f" ({self.detail})"
        return message


def check_context(context: Sequence[int]) -> None:
    """
    Verify a neighbor context is well-formed.

    Raises:
        InvalidContext: If the context length is not exactly 8
    """
    if len(context) != CONTEXT_SIZE:
        raise InvalidContext(len(context))


def normalize_context(context: Sequence[int]) -> Tuple[int, ...]:
    """
    Context as a tuple of plain ints (numpy integers are converted).

    Raises:
        InvalidContext: If the length is not exactly 8 or a value is not an
            integer (floats are rejected, not truncated)
    """
    check_context(context)
    try:
        return tuple(operator.index(value) for value in context)
    except TypeError:
        raise InvalidContext(len(context), "non-integer terrain id")


def make_signature(center: int, context: Sequence[int]) -> str:
    """
    Build the deterministic key for a center terrain and its context.

    Args:
        center: Center terrain id
        context: 8 terrain ids in NW, N, NE, W, E, SW, S, SE order

    Returns:
        Delimited string, e.g. "1:1:1:1:1:1:1:1:1"

    Raises:
        InvalidContext: If the context length is not exactly 8 or a value
            is not an integer

    Example:
        >>> make_signature(3, [0, 0, 0, 3, 3, 3, 3, 3])
        '3:0:0:0:3:3:3:3:3'
    """
    values = normalize_context(context)
    try:
        center = operator.index(center)
    except TypeError:
        raise InvalidContext(len(values), f"non-integer center terrain {center!r}")
    return SIGNATURE_DELIMITER.join(str(value) for value in (center, *values))


def parse_signature(signature: str) -> Tuple[int, Tuple[int, ...]]:
    """
    Split a signature back into its center terrain and context.

    Raises:
        InvalidContext: If the signature does not hold a center plus 8 values
    """
    parts = signature.split(SIGNATURE_DELIMITER)
    try:
        values = [int(part) for part in parts]
    except ValueError:
        raise InvalidContext(len(parts) - 1, f"non-integer value in {signature!r}")

    if len(values) != CONTEXT_SIZE + 1:
        raise InvalidContext(len(values) - 1, f"signature {signature!r}")

    return values[0], tuple(values[1:])
