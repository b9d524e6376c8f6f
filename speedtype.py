#!/usr/bin/env python3

import argparse
import curses
import logging
import os
import shutil
import sys

from theme import DEFAULT_THEME
from typing_session import ConstructionError, TypingSession
from word_source import (DEFAULT_WORDLIST, WORD_COUNT, WordSourceError,
                         words_from_api, words_from_file)

os.environ.setdefault('ESCDELAY', '0')

log = logging.getLogger('speedtype')

REFRESH_MS = 100  # timer redraw cadence
HELP = '{:.2f}s · esc, ^c: exit'


def setup_logging(log_file=None, verbose=False):
    level = logging.DEBUG if verbose else logging.INFO
    if log_file:
        logging.basicConfig(
            level=level,
            format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
            filename=log_file,
            encoding='utf-8',
        )
    else:
        # stderr is shared with curses, keep it quiet
        logging.basicConfig(level=logging.WARNING,
                            format='%(levelname)s: %(message)s')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Terminal typing speed trainer.')
    parser.add_argument('--api', action='store_true',
                        help='Fetch random words from an online API instead of the wordlist.')
    parser.add_argument('--wordlist', default=str(DEFAULT_WORDLIST),
                        help='Newline separated word file (default: bundled wordlist).')
    parser.add_argument('--count', type=int, default=WORD_COUNT,
                        help='Number of words to type (default: %(default)s).')
    parser.add_argument('--width', type=int, default=None,
                        help='Wrap width (default: terminal width).')
    parser.add_argument('--log-file', default=None,
                        help='Write a log to this file.')
    parser.add_argument('--verbose', action='store_true',
                        help='Log debug messages.')
    args = parser.parse_args(argv)
    if args.count <= 0:
        parser.error('--count must be positive')
    if args.width is not None and args.width <= 0:
        parser.error('--width must be positive')
    return args


def get_words(args):
    if args.api:
        return words_from_api(args.count)
    return words_from_file(args.wordlist, args.count)


def draw(stdscr, session, palette):
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    y = 0
    for line in session.lines():
        if y >= height - 2:
            break
        for x, cell in enumerate(line[:width]):
            stdscr.addstr(y, x, cell.char, palette.attr(cell))
        y += 1
    if y + 1 < height and width > 3:
        stdscr.addstr(y + 1, 2, HELP.format(session.elapsed)[:width - 3], palette.help)
    stdscr.refresh()


def run(stdscr, session, theme=DEFAULT_THEME):
    palette = theme.install()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    curses.raw()
    stdscr.timeout(REFRESH_MS)
    going = True
    while going:
        draw(stdscr, session, palette)
        try:
            ch = stdscr.getkey()
        except curses.error:
            continue  # timeout, redraw the timer
        except KeyboardInterrupt:
            ch = '\x03'
        going = session.handle_key(ch)
    return session.finish()


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    try:
        words = get_words(args)
        width = args.width or shutil.get_terminal_size().columns
        session = TypingSession(words, max(1, width - 1))
    except (WordSourceError, ConstructionError) as e:
        log.error('%s', e)
        sys.stderr.write('speedtype: {}\n'.format(e))
        return 1
    summary = curses.wrapper(run, session)
    log.info('wpm=%.1f accuracy=%s completed=%s',
             summary.wpm, summary.accuracy, summary.completed)
    print(session.render(), end='')
    return 0


if __name__ == '__main__':
    sys.exit(main())
