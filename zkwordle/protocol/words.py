import logging
from pathlib import Path

from zkwordle.protocol.types import WORD_LENGTH

logger = logging.getLogger(__name__)

BUNDLED_WORDS = Path(__file__).with_name("words.txt")


def load_words(path=None):
    """한 줄에 한 단어인 파일 → 대문자 단어 frozenset.

    길이가 WORD_LENGTH가 아니거나 알파벳이 아닌 줄은 건너뛴다.
    """
    path = Path(path) if path else BUNDLED_WORDS
    words = set()
    with open(path, encoding="utf-8") as f:
        for line in f:
            word = line.strip().upper()
            if len(word) == WORD_LENGTH and word.isascii() and word.isalpha():
                words.add(word)
            elif word:
                logger.debug("Skipping dictionary entry %r", word)
    logger.info("Loaded %d allowed guesses from %s", len(words), path)
    return frozenset(words)


class Dictionary:
    """허용된 추측 단어 집합. 네트워크 없이 로컬에서만 검사한다."""

    def __init__(self, words):
        self.words = frozenset(w.upper() for w in words)

    @classmethod
    def load(cls, path=None):
        return cls(load_words(path))

    def __contains__(self, word):
        return isinstance(word, str) and word.upper() in self.words

    def __len__(self):
        return len(self.words)
