"""Colors and attributes used to draw a session."""

from dataclasses import dataclass
import curses

from typing_session import Status


@dataclass(frozen=True)
class Palette:
    neutral: int
    good: int
    bad: int
    cursor: int
    help: int

    def attr(self, cell):
        if cell.status is Status.GOOD:
            attr = self.good
        elif cell.status is Status.BAD:
            attr = self.bad
        else:
            attr = self.neutral
        if cell.is_cursor:
            attr |= self.cursor
        return attr


@dataclass(frozen=True)
class Theme:
    good: int = curses.COLOR_GREEN
    bad: int = curses.COLOR_RED
    help: int = curses.COLOR_WHITE
    background: int = -1

    def install(self):
        """Set up color pairs. Call only inside curses.wrapper."""
        if not curses.has_colors():
            return Palette(curses.A_NORMAL, curses.A_BOLD, curses.A_REVERSE,
                           curses.A_UNDERLINE, curses.A_DIM)
        curses.start_color()
        try:
            curses.use_default_colors()
            background = self.background
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(1, self.good, background)
        curses.init_pair(2, self.bad, background)
        curses.init_pair(3, self.help, background)
        return Palette(curses.A_NORMAL, curses.color_pair(1), curses.color_pair(2),
                       curses.A_UNDERLINE, curses.color_pair(3) | curses.A_DIM)


DEFAULT_THEME = Theme()
