"""Flow layout for chip-style items (tags, tech stack badges).

Items are packed left to right and wrap onto a new line when the next item
would cross ``max_width``. An item wider than the line is placed alone at
``x == 0`` and allowed to overflow.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Sequence, Tuple

DEFAULT_SPACING = 8.0


class Size(NamedTuple):
    width: float
    height: float


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class FlowResult:
    offsets: List[Point]
    size: Size
    line_numbers: List[int]

    @property
    def line_count(self) -> int:
        return self.line_numbers[-1] + 1 if self.line_numbers else 0

    def lines(self) -> List[List[int]]:
        """Group item indices by line, in input order."""
        grouped: List[List[int]] = [[] for _ in range(self.line_count)]
        for index, line in enumerate(self.line_numbers):
            grouped[line].append(index)
        return grouped


def pack(
    max_width: float,
    items: Iterable[Tuple[float, float]],
    spacing: float = DEFAULT_SPACING,
) -> FlowResult:
    x = 0.0
    y = 0.0
    line_height = 0.0
    line = 0
    offsets: List[Point] = []
    line_numbers: List[int] = []

    for width, height in items:
        # x > 0 keeps an oversized item from wrapping against itself
        if x > 0 and x + width > max_width:
            x = 0.0
            y += line_height + spacing
            line_height = 0.0
            line += 1
        offsets.append(Point(x, y))
        line_numbers.append(line)
        line_height = max(line_height, height)
        x += width + spacing

    return FlowResult(offsets=offsets, size=Size(max_width, y + line_height), line_numbers=line_numbers)


def measure_chips(
    labels: Sequence[str],
    char_width: float = 7.0,
    padding: float = 12.0,
    height: float = 28.0,
) -> List[Size]:
    """Estimate intrinsic chip sizes from label length."""
    return [Size(len(label) * char_width + 2 * padding, height) for label in labels]


def chip_rows(labels: Sequence[str], max_width: int, spacing: int = 1) -> List[List[str]]:
    """Wrap labels into rows of terminal cells; each chip is rendered as ``[label]``."""
    sizes = [Size(len(label) + 2, 1) for label in labels]
    result = pack(max_width, sizes, spacing)
    return [[labels[index] for index in line] for line in result.lines()]
