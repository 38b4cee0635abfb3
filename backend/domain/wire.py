"""
Flat-integer wire format used by the host.

A snake body is a fixed-width block of ``MAX_SEGMENTS`` (x, y) pairs, head
first. The first pair with a component below 1 ends the body; the rest of
the block is padding. Opponents arrive as concatenated blocks, one per
slot. Foods are a plain list of pairs with no sentinel; any pair with both
components >= 1 is a food.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from .board import Coordinate
from .constants import MAX_SEGMENTS, SEGMENT_BLOCK_WIDTH, SENTINEL


@dataclass
class RoundSnapshot:
    """One decoded call from the host."""

    board_size: int
    my_body: List[Coordinate]
    opponent_count: int
    opponent_bodies: List[List[Coordinate]] = field(default_factory=list)
    foods: List[Coordinate] = field(default_factory=list)
    round_number: int = 0

    def __post_init__(self):
        if self.board_size < 1:
            raise ValueError(f"Board size must be positive, got {self.board_size}.")

    @property
    def is_dead(self) -> bool:
        return not self.my_body


def parse_body(values: Sequence[int]) -> List[Coordinate]:
    """Decode one sentinel-terminated body block."""
    body: List[Coordinate] = []
    for i in range(min(MAX_SEGMENTS, len(values) // 2)):
        x, y = values[2 * i], values[2 * i + 1]
        if x < 1 or y < 1:
            break
        body.append((x, y))
    return body


def parse_opponents(values: Sequence[int]) -> List[List[Coordinate]]:
    """Decode concatenated opponent blocks; a trailing partial block is dropped."""
    slots = len(values) // SEGMENT_BLOCK_WIDTH
    return [
        parse_body(values[i * SEGMENT_BLOCK_WIDTH:(i + 1) * SEGMENT_BLOCK_WIDTH])
        for i in range(slots)
    ]


def parse_foods(values: Sequence[int]) -> List[Coordinate]:
    foods: List[Coordinate] = []
    for i in range(len(values) // 2):
        x, y = values[2 * i], values[2 * i + 1]
        if x >= 1 and y >= 1:
            foods.append((x, y))
    return foods


def encode_body(body: Sequence[Coordinate]) -> List[int]:
    """Encode a body into a fixed-width block, padding with the sentinel."""
    values: List[int] = []
    for x, y in list(body)[:MAX_SEGMENTS]:
        values.extend((x, y))
    values.extend([SENTINEL] * (SEGMENT_BLOCK_WIDTH - len(values)))
    return values


def encode_cells(cells: Sequence[Coordinate]) -> List[int]:
    values: List[int] = []
    for x, y in cells:
        values.extend((x, y))
    return values


def decode_round(
    n: int,
    my_snake: Sequence[int],
    snake_num: int,
    other_snakes: Sequence[int],
    foods: Sequence[int],
    round_number: int = 0,
) -> RoundSnapshot:
    """Build a :class:`RoundSnapshot` from the host's flat arrays."""
    return RoundSnapshot(
        board_size=n,
        my_body=parse_body(my_snake),
        opponent_count=snake_num,
        opponent_bodies=parse_opponents(other_snakes),
        foods=parse_foods(foods),
        round_number=round_number,
    )
