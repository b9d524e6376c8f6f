"""Where the words to type come from: a local wordlist or a word API."""

from pathlib import Path
from urllib.request import urlopen
import json
import logging
import random
import re
import sysconfig

log = logging.getLogger(__name__)

WORD_COUNT = 10
API_URL = 'https://random-word-api.herokuapp.com/word?number={}'
API_TIMEOUT = 5.0

typeable = re.compile('^[a-z]+$')


def find_wordlist(here=Path(__file__).parent, data_dir=sysconfig.get_path('data')):
    """Locate the bundled wordlist.

    A source checkout keeps it beside the modules; an installed copy has it
    under <prefix>/share/speedtype, where pyproject's data-files puts it.
    """
    candidates = [Path(here) / 'wordlist',
                  Path(data_dir) / 'share' / 'speedtype' / 'wordlist']
    for path in candidates:
        if path.is_file():
            return path
    return candidates[0]


DEFAULT_WORDLIST = find_wordlist()


class WordSourceError(RuntimeError):
    pass


def clean(words):
    """Lowercase, strip and drop anything that can't be typed."""
    out = []
    for word in words:
        word = word.strip().lower()
        if typeable.match(word):
            out.append(word)
        elif word:
            log.debug('skipping untypeable word %r', word)
    return out


def load_wordlist(path=DEFAULT_WORDLIST):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            wordlist = clean(f.readlines())
    except OSError as e:
        raise WordSourceError("Couldn't read word file {}: {}".format(path, e)) from e
    log.debug('loaded %d words from %s', len(wordlist), path)
    return wordlist


def words_from_file(path=DEFAULT_WORDLIST, count=WORD_COUNT, rng=random):
    wordlist = load_wordlist(path)
    if not wordlist:
        raise WordSourceError('No usable words in {}'.format(path))
    if len(wordlist) <= count:
        rng.shuffle(wordlist)
        return wordlist
    return rng.sample(wordlist, count)


def words_from_api(count=WORD_COUNT, url=API_URL, timeout=API_TIMEOUT):
    """Fetch random words from a service returning a JSON array of strings.

    They will most likely be long and rarely used.
    """
    url = url.format(count)
    log.info('fetching words from %s', url)
    try:
        with urlopen(url, timeout=timeout) as resp:
            body = resp.read()
        data = json.loads(body.decode('utf-8'))
    except (OSError, ValueError) as e:
        raise WordSourceError('Error getting words from {}: {}'.format(url, e)) from e
    if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
        raise WordSourceError('Unexpected word server response: {!r}'.format(data))
    words = clean(data)
    if not words:
        raise WordSourceError('Word server returned no usable words')
    return words[:count]
