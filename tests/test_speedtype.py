"""Tests for the command line wrapper; curses itself is stubbed out."""

import pytest

import speedtype
from typing_session import TypingSession
from word_source import WordSourceError


class TestParseArgs:
    def test_defaults(self):
        args = speedtype.parse_args([])
        assert not args.api
        assert args.count == 10
        assert args.width is None

    def test_rejects_bad_count(self):
        with pytest.raises(SystemExit):
            speedtype.parse_args(['--count', '0'])

    def test_rejects_bad_width(self):
        with pytest.raises(SystemExit):
            speedtype.parse_args(['--width', '-1'])


class TestMain:
    def test_runs_session(self, monkeypatch, capsys, tmp_path):
        wordfile = tmp_path / 'words'
        wordfile.write_text('cat\ndog\n', encoding='utf-8')

        def wrapper(func, session):
            for ch in session.buffer:
                session.handle_key(ch)
            return session.finish()
        monkeypatch.setattr(speedtype.curses, 'wrapper', wrapper)
        rc = speedtype.main(['--wordlist', str(wordfile), '--count', '2', '--width', '40'])
        assert rc == 0
        out = capsys.readouterr().out
        assert 'Correctly typed 2 words' in out
        assert 'Accuracy: 100.0%' in out

    def test_word_source_failure(self, monkeypatch, capsys, tmp_path):
        rc = speedtype.main(['--wordlist', str(tmp_path / 'missing')])
        assert rc == 1
        assert "Couldn't read word file" in capsys.readouterr().err

    def test_api_flag(self, monkeypatch):
        def boom(count):
            raise WordSourceError('offline')
        monkeypatch.setattr(speedtype, 'words_from_api', boom)
        assert speedtype.main(['--api']) == 1


class FakeScreen:
    """Just enough of a curses window for run() and draw()."""

    def __init__(self, keys, size=(10, 40)):
        self.keys = list(keys)
        self.size = size
        self.written = []
        self.attrs = {}

    def erase(self):
        self.written = []
        self.attrs = {}

    def getmaxyx(self):
        return self.size

    def addstr(self, y, x, text, attr=0):
        self.written.append((y, x, text))
        self.attrs[(y, x)] = attr

    def refresh(self):
        pass

    def timeout(self, ms):
        pass

    def getkey(self):
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key


class FakeTheme:
    def install(self):
        from theme import Palette
        return Palette(0, 1, 2, 4, 8)


@pytest.fixture
def no_curses(monkeypatch):
    monkeypatch.setattr(speedtype.curses, 'curs_set', lambda n: None)
    monkeypatch.setattr(speedtype.curses, 'raw', lambda: None)


class TestRun:
    def test_timeout_then_typing(self, no_curses):
        session = TypingSession(['ab'], 40)
        screen = FakeScreen([speedtype.curses.error(), 'a', 'b'])
        summary = speedtype.run(screen, session, FakeTheme())
        assert summary.good_words == 1
        assert session.finished

    def test_keyboard_interrupt_aborts(self, no_curses):
        session = TypingSession(['abc'], 40)
        screen = FakeScreen(['a', KeyboardInterrupt()])
        summary = speedtype.run(screen, session, FakeTheme())
        assert not summary.completed
        assert summary.typed_chars == 1

    def test_draw_writes_lines(self):
        session = TypingSession(['alpha', 'beta'], 6)
        screen = FakeScreen([])
        palette = FakeTheme().install()
        speedtype.draw(screen, session, palette)
        rows = {y for y, x, text in screen.written}
        assert {0, 1} <= rows
        assert any('esc, ^c: exit' in text for y, x, text in screen.written)

    def test_draw_full_line_keeps_breaking_space(self):
        """main wraps at width - 1, so a full row is width cells wide."""
        width = 10
        session = TypingSession(['abcdefghi', 'xy'], width - 1)
        for ch in 'abcdefghi':
            session.handle_key(ch)
        assert session.line_breaks == {9}
        screen = FakeScreen([], size=(10, width))
        speedtype.draw(screen, session, FakeTheme().install())
        assert (0, 9, ' ') in screen.written
        assert screen.attrs[(0, 9)] & 4  # cursor underline
        assert all(x < width for y, x, text in screen.written if y == 0)

    def test_draw_very_narrow_terminal(self):
        session = TypingSession(['ab'], 1)
        screen = FakeScreen([], size=(10, 3))
        speedtype.draw(screen, session, FakeTheme().install())
        assert not any('esc' in text for y, x, text in screen.written)
        assert all(x + len(text) <= 3 for y, x, text in screen.written)
