"""
조립 지점 (composition root)
============================

UI는 create_game()이 돌려주는 ClueProtocol만 사용한다::

    game = create_game()
    state = await game.start()              # VerificationState
    result = await game.submit_guess("crane")
    game.history, game.keyboard_colors(), game.finished
"""

from functools import lru_cache

from zkwordle.config import Config
from zkwordle.groth16.keys import load_keyring
from zkwordle.log import setup_logging
from zkwordle.protocol.clue import ClueProtocol
from zkwordle.protocol.commitment import CommitmentSession
from zkwordle.protocol.words import Dictionary
from zkwordle.store import TranscriptStore
from zkwordle.transport import HttpGameServer


@lru_cache(maxsize=None)
def keyring(clue_path, membership_path):
    # 프로세스당 한 번만 로드한다
    return load_keyring(clue_path, membership_path)


@lru_cache(maxsize=None)
def dictionary(path=None):
    return Dictionary.load(path)


def create_game(config=Config, server=None, store=None):
    setup_logging(config.LOG_LEVEL)
    keys = keyring(config.CLUE_VK_PATH, config.MEMBERSHIP_VK_PATH)

    if server is None:
        server = HttpGameServer(config.SERVER_URL, timeout=config.REQUEST_TIMEOUT)
    if store is None:
        if config.TRANSCRIPT_PATH:
            store = TranscriptStore.open(config.TRANSCRIPT_PATH)
        else:
            store = TranscriptStore.in_memory()

    session = CommitmentSession(server, keys.membership, root_hash=config.MEMBERSHIP_ROOT, store=store)
    return ClueProtocol(session, keys.clue, dictionary(config.WORDLIST_PATH), store=store)
