"""
Rendering Engine
=================
Double-buffered terminal renderer. Scales the 640x640 world arena
onto the terminal grid and draws the status strip along the bottom.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Tuple

from blessed import Terminal

from .ecs import World
from .components import Position, Size, Sprite, TargetTag, PlayerTag
from .config import (
    WIDTH, HEIGHT, TEXT_BAR_HEIGHT, ANSI_COLORS, HELP_TEXT, SCORE_LABEL,
    STATUS_BAR_COLOR, STATUS_TEXT_COLOR, SCORE_TEXT_COLOR
)

BLOCK = '█'
DEFAULT_FG = 7
NO_BG = -1  # Terminal default background


class Cell(NamedTuple):
    """One terminal cell. Immutable, so rows can share the blank cell."""
    char: str = ' '
    fg: int = DEFAULT_FG
    bg: int = NO_BG


BLANK = Cell()


class DoubleBuffer:
    """
    Two cell grids: the frame being drawn and the frame on screen.

    present() diffs them row by row and emits each run of changed,
    same-colored cells with a single cursor move and color change.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = 0
        self.height = 0
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self.resize(term.width, term.height)

    def _blank_grid(self) -> List[List[Cell]]:
        return [[BLANK] * self.width for _ in range(self.height)]

    def resize(self, width: int, height: int):
        """Start over at a new size; the next present() redraws everything drawn."""
        self.width = width
        self.height = height
        self.front = self._blank_grid()
        self.back = self._blank_grid()

    def clear_back(self):
        self.back = self._blank_grid()

    def put(self, x: int, y: int, char: str, fg: int = DEFAULT_FG, bg: int = NO_BG):
        """Set one cell of the frame being drawn. Off-screen writes are dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.back[y][x] = Cell(char or ' ', fg, bg)

    def put_string(self, x: int, y: int, text: str, fg: int = DEFAULT_FG, bg: int = NO_BG):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg, bg)

    def _style(self, cell: Cell) -> str:
        # Reset first so a previous background never bleeds into this run
        style = self.term.normal
        if cell.bg != NO_BG:
            style += self.term.on_color(cell.bg)
        return style + self.term.color(cell.fg)

    def _row_runs(self, y: int) -> Iterator[Tuple[int, List[Cell]]]:
        """(start column, cells) for each run of changed cells sharing colors."""
        drawn, shown = self.back[y], self.front[y]
        x = 0
        while x < self.width:
            if drawn[x] == shown[x]:
                x += 1
                continue
            start = x
            run = [drawn[x]]
            colors = (drawn[x].fg, drawn[x].bg)
            x += 1
            while (x < self.width and drawn[x] != shown[x]
                   and (drawn[x].fg, drawn[x].bg) == colors):
                run.append(drawn[x])
                x += 1
            yield start, run

    def present(self) -> str:
        """Swap the grids and return the output that brings the screen up to date."""
        output = []
        for y in range(self.height):
            for x, run in self._row_runs(y):
                output.append(self.term.move_xy(x, y))
                output.append(self._style(run[0]))
                output.append(''.join(cell.char for cell in run))

        self.front, self.back = self.back, self.front
        return ''.join(output)


@dataclass
class GameRenderer:
    """
    Maps world coordinates (+y up, origin at the arena center) to
    terminal cells (+y down, origin top-left) and draws a frame.
    """
    term: Terminal
    buffer: DoubleBuffer = field(init=False)
    score_text: str = '0'

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def bar_rows(self) -> int:
        """Rows taken by the status strip."""
        return max(1, round(self.height * TEXT_BAR_HEIGHT / HEIGHT))

    def world_to_cell(self, x: float, y: float) -> Tuple[int, int]:
        """Terminal cell containing a world point, clamped to the screen."""
        col = math.floor((x + WIDTH / 2.0) / WIDTH * self.width)
        row = math.floor((HEIGHT / 2.0 - y) / HEIGHT * self.height)
        return (
            min(max(col, 0), self.width - 1),
            min(max(row, 0), self.height - 1),
        )

    def draw_box(self, x: float, y: float, width: float, height: float, color: int):
        """Fill the cells covered by a centered world-space box."""
        left, top = self.world_to_cell(x - width / 2.0, y + height / 2.0)
        right, bottom = self.world_to_cell(x + width / 2.0, y - height / 2.0)
        # Keep small boxes visible on coarse grids
        right = max(right, left)
        bottom = max(bottom, top)
        for row in range(top, min(bottom, self.height - self.bar_rows - 1) + 1):
            for col in range(left, right + 1):
                self.buffer.put(col, row, BLOCK, color)

    def draw_status_bar(self):
        """Help text on the left, score on the right, over a colored strip."""
        score = SCORE_LABEL + self.score_text
        for row in range(self.height - self.bar_rows, self.height):
            self.buffer.put_string(0, row, ' ' * self.width, STATUS_TEXT_COLOR, STATUS_BAR_COLOR)

        row = self.height - 1 - (self.bar_rows - 1) // 2
        help_room = max(0, self.width - len(score) - 2)
        self.buffer.put_string(1, row, HELP_TEXT[:help_room], STATUS_TEXT_COLOR, STATUS_BAR_COLOR)
        self.buffer.put_string(self.width - len(score) - 1, row, score,
                               SCORE_TEXT_COLOR, STATUS_BAR_COLOR)

    def draw_world(self, world: World):
        """Targets first, then the player on top."""
        for tag in (TargetTag, PlayerTag):
            for _, pos, size, sprite, _ in world.query(Position, Size, Sprite, tag):
                color = ANSI_COLORS.get(sprite.color, DEFAULT_FG)
                self.draw_box(pos.x, pos.y, size.width, size.height, color)

    def render(self, world: World) -> str:
        """Draw one frame and return only the changed cells."""
        self.buffer.clear_back()
        self.draw_world(world)
        self.draw_status_bar()
        return self.buffer.present()

    def resize(self, width: int, height: int):
        """Handle terminal resize."""
        self.buffer.resize(width, height)
