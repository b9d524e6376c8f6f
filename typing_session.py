"""Typing session state machine and end-of-session statistics."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from time import monotonic
import logging
import textwrap

from editdistance import eval as editdist

log = logging.getLogger(__name__)

ok_inputs = ' abcdefghijklmnopqrstuvwxyz'
ABORT_KEYS = ('\x03', '\x1b')  # ctrl+c, escape
CHARS_PER_WORD = 5
ABOUT = 'See https://monkeytype.com/about for details about those stats.'


class ConstructionError(ValueError):
    pass


class Status(Enum):
    NEUTRAL = 'neutral'
    GOOD = 'good'
    BAD = 'bad'


@dataclass(frozen=True)
class Cell:
    index: int
    char: str
    status: Status
    is_cursor: bool


@dataclass(frozen=True)
class Summary:
    good_words: int
    good_chars: int
    seconds: float
    wpm: float
    accuracy: Optional[float]  # percent, None when nothing was typed
    edit_distance: int
    typed_chars: int
    completed: bool

    def __str__(self):
        if self.accuracy is None:
            acc = 'N/A'
        else:
            acc = '{:.1f}%'.format(self.accuracy)
        return ('Correctly typed {} words in {:.2f}s.\n'
                'WPM: {:.0f}\n'
                'Accuracy: {}\n'
                'Edit distance: {}\n'
                '{}\n').format(self.good_words, self.seconds, self.wpm, acc,
                               self.edit_distance, ABOUT)


class Stopwatch:
    """Passive elapsed-time accumulator, read on demand."""

    def __init__(self, clock=monotonic):
        self.clock = clock
        self.started_at = None
        self.stopped_at = None

    @property
    def running(self):
        return self.started_at is not None and self.stopped_at is None

    def start(self):
        if self.started_at is None:
            self.started_at = self.clock()

    def stop(self):
        if self.running:
            self.stopped_at = self.clock()

    @property
    def elapsed(self):
        if self.started_at is None:
            return 0.0
        end = self.stopped_at if self.stopped_at is not None else self.clock()
        return max(0.0, end - self.started_at)


def wrap_breaks(text, width):
    """Return the indices of the spaces in text where a display line ends."""
    lines = textwrap.wrap(text, width, break_long_words=False,
                          break_on_hyphens=False)
    if ' '.join(lines) != text:
        # wrap changed more than the separating spaces; don't break at all
        return frozenset()
    breaks = []
    pos = 0
    for line in lines[:-1]:
        pos += len(line)
        breaks.append(pos)
        pos += 1
    return frozenset(breaks)


def wpm(good_chars, seconds):
    if seconds <= 0:
        return 0.0
    return good_chars / CHARS_PER_WORD / (seconds / 60)


def accuracy(statuses):
    if not statuses:
        return None
    good = sum(1 for s in statuses if s is Status.GOOD)
    return good / len(statuses) * 100


def word_verdicts(buffer, statuses):
    typed = []
    flag = Status.GOOD
    for index, char in enumerate(buffer):
        if char == ' ':
            # end of a word
            typed.append(flag)
            flag = Status.GOOD
        elif statuses[index] is not Status.GOOD:
            flag = Status.BAD
    # the last word has no trailing space
    typed.append(flag)
    return typed


class TypingSession:
    def __init__(self, words, wrap_width, clock=monotonic):
        if not isinstance(wrap_width, int) or wrap_width <= 0:
            raise ConstructionError(
                'wrap width must be a positive integer, got {!r}'.format(wrap_width))
        words = tuple(w.strip() for w in words)
        words = tuple(w for w in words if w)
        for word in words:
            if len(word.split()) != 1:
                raise ConstructionError('word {!r} contains whitespace'.format(word))
        self.words = words
        self.buffer = ' '.join(words)
        if len(self.buffer) == 0:
            raise ConstructionError('zero words provided')
        self.line_breaks = wrap_breaks(self.buffer, wrap_width)
        self.statuses = [Status.NEUTRAL] * len(self.buffer)
        self.typed = []
        self.cursor = 0
        self.timer = Stopwatch(clock)
        self.finished = False
        self.summary = None
        log.debug('session with %d words, %d chars, %d lines',
                  len(self.words), len(self.buffer), len(self.line_breaks) + 1)

    @property
    def elapsed(self):
        return self.timer.elapsed

    def handle_key(self, key):
        """Feed one key event. Returns False once the session is over."""
        if self.finished:
            return False
        if key in ABORT_KEYS:
            log.info('session aborted at %d/%d', self.cursor, len(self.buffer))
            self.finish()
            return False
        if len(key) != 1 or key not in ok_inputs:
            return True
        if self.cursor == 0 and not self.timer.running:
            self.timer.start()
        if key == self.buffer[self.cursor]:
            self.statuses[self.cursor] = Status.GOOD
        else:
            self.statuses[self.cursor] = Status.BAD
        self.typed.append(key)
        self.cursor += 1
        if self.cursor == len(self.buffer):
            self.finish()
            return False
        return True

    def finish(self):
        if self.finished:
            return self.summary
        self.finished = True
        self.timer.stop()
        verdicts = word_verdicts(self.buffer, self.statuses)
        assert len(verdicts) == len(self.words), (verdicts, self.words)
        good_words = 0
        good_chars = 0
        for index, verdict in enumerate(verdicts):
            if verdict is Status.GOOD:
                good_words += 1
                good_chars += len(self.words[index])
        seconds = self.timer.elapsed
        self.summary = Summary(
            good_words=good_words,
            good_chars=good_chars,
            seconds=seconds,
            wpm=wpm(good_chars, seconds),
            accuracy=accuracy(self.statuses[:self.cursor]),
            edit_distance=editdist(''.join(self.typed), self.buffer[:self.cursor]),
            typed_chars=self.cursor,
            completed=self.cursor == len(self.buffer),
        )
        log.info('session finished: %d/%d words, %.1f wpm',
                 good_words, len(self.words), self.summary.wpm)
        return self.summary

    def cells(self):
        for index, char in enumerate(self.buffer):
            yield Cell(index, char, self.statuses[index],
                       index == self.cursor and not self.finished)

    def lines(self):
        line = []
        for cell in self.cells():
            line.append(cell)
            if cell.index in self.line_breaks:
                yield line
                line = []
        yield line

    def render(self):
        text = '\n'.join(''.join(c.char for c in line) for line in self.lines())
        if self.finished:
            return text + '\n\n' + str(self.summary)
        return text + '\n\n  {:.2f}s · esc, ^c: exit\n'.format(self.elapsed)
