"""
추측 한 번의 검증 사이클
========================

submit_guess(word) 단계 (각 단계가 종료 지점이 될 수 있다):

  1. 로컬 사전 검사          → 실패 시 INVALID_GUESS (네트워크/상태 변경 없음)
  2. 현재 session_id로 clue 요청 → "세션 없음"이면 STALE
  3. 증명 파싱               → 실패 시 MalformedProof 전파 (로컬 치명 오류)
  4. clue 신호 구성 + 검증 (clue 키)
  5. 검증 실패               → 세션 INVALID, 기록하지 않음
  6. 검증 성공               → history에 추가, 글자 분류 집합 갱신

동시에 하나의 추측만 진행할 수 있다. 진행 중에 들어온 추측은 BUSY로 즉시 거절한다.
게임은 6번 추측했거나 마지막 추측이 모두 GREEN이면 끝난다.
"""

import asyncio
import logging

from zkwordle.errors import InvalidGuess, MalformedResponse, StaleSession, VerificationFailed
from zkwordle.groth16.verifying import verify
from zkwordle.protocol import codec
from zkwordle.protocol.signals import build_clue_signals
from zkwordle.protocol.types import (
    MAX_GUESSES,
    WORD_LENGTH,
    Clue,
    Color,
    Guess,
    GuessResult,
    Reason,
    VerificationState,
    check_colors,
)

logger = logging.getLogger(__name__)


class ClueProtocol:

    def __init__(self, session, clue_key, dictionary, verifier=verify, store=None):
        self.session = session
        self.clue_key = clue_key
        self.dictionary = dictionary
        self.verifier = verifier
        self.store = store
        self._in_flight = False
        self._reset()

    def _reset(self):
        self._history = []
        self._green = set()
        self._yellow = set()
        self._dark_grey = set()

    # ─── 읽기 전용 상태 ───

    @property
    def history(self):
        return tuple(self._history)

    @property
    def green_letters(self):
        return frozenset(self._green)

    @property
    def yellow_letters(self):
        return frozenset(self._yellow)

    @property
    def dark_grey_letters(self):
        return frozenset(self._dark_grey)

    @property
    def state(self):
        return self.session.state

    @property
    def in_flight(self):
        return self._in_flight

    @property
    def won(self):
        return bool(self._history) and self._history[-1].solved

    @property
    def finished(self):
        return len(self._history) >= MAX_GUESSES or self.won

    def letter_color(self, letter):
        # GREEN > YELLOW > DARK_GREY, 아직 쓰지 않은 글자는 GREY
        letter = letter.upper()
        if letter in self._green:
            return Color.GREEN
        if letter in self._yellow:
            return Color.YELLOW
        if letter in self._dark_grey:
            return Color.DARK_GREY
        return Color.GREY

    def keyboard_colors(self):
        return {chr(ord("A") + i): self.letter_color(chr(ord("A") + i)) for i in range(26)}

    # ─── 세션 수명 ───

    async def start(self):
        if self._in_flight:
            raise RuntimeError("cannot restart the session while a guess is being verified")
        self._reset()
        return await self.session.start()

    # ─── 추측 ───

    def _precheck(self, word):
        if self._in_flight:
            return Reason.BUSY
        if self.session.commitment is None:
            return Reason.NOT_STARTED
        state = self.session.state
        if state is VerificationState.STALE:
            return Reason.STALE
        if state is not VerificationState.VERIFIED:
            return Reason.UNTRUSTED
        if self.finished:
            return Reason.FINISHED
        if not isinstance(word, str) or len(word) != WORD_LENGTH:
            return Reason.WRONG_LENGTH
        return None

    async def submit_guess(self, word):
        reason = self._precheck(word)
        if reason is not None:
            logger.info("Rejected guess %r: %s", word, reason.value)
            return GuessResult.rejected(reason)

        word = word.upper()
        commitment = self.session.commitment
        self._in_flight = True
        try:
            guess = await self._run(word, commitment)
        except InvalidGuess:
            logger.info("Rejected guess %s: not in the dictionary", word)
            return GuessResult.rejected(Reason.INVALID_GUESS)
        except StaleSession as e:
            if self.session.commitment is commitment:
                self.session.mark_stale()
            logger.warning("Guess %s hit a stale session: %s", word, e)
            return GuessResult.rejected(Reason.STALE)
        except VerificationFailed as e:
            self.session.mark_invalid()
            logger.warning("%s", e)
            return GuessResult.rejected(Reason.UNTRUSTED)
        except MalformedResponse as e:
            logger.error("Malformed clue response for %s: %s", word, e)
            raise
        finally:
            self._in_flight = False

        return GuessResult(accepted=True, colors=guess.colors, guess=guess)

    async def _run(self, word, commitment):
        if word not in self.dictionary:
            raise InvalidGuess(word)

        response = await self.session.server.request_clue(word, commitment.session_id)
        if self.session.commitment is not commitment:
            raise StaleSession("commitment was replaced while {} was pending".format(word))

        colors = check_colors(response.colors)
        proof = codec.parse(response.proof)
        clue = Clue.from_raw(colors, proof)
        signals = build_clue_signals(word, clue, commitment.value)
        valid = await asyncio.to_thread(self.verifier, self.clue_key, signals, proof)

        if self.session.commitment is not commitment:
            raise StaleSession("commitment was replaced while {} was being verified".format(word))
        if not valid:
            raise VerificationFailed(
                "clue proof for {} does not verify against commitment {}: the server is lying"
                .format(word, commitment.value))

        guess = Guess(word=word, colors=clue.colors)
        self._record(guess)
        if self.store is not None:
            self.store.record_guess(commitment.session_id, word, clue)
        logger.info("Verified clue for %s: %s", word, "".join(str(d) for d in clue.raw_signal))
        return guess

    def _record(self, guess):
        self._history.append(guess)
        for letter, color in zip(guess.word, guess.colors):
            if color is Color.GREEN:
                self._green.add(letter)
            elif color is Color.YELLOW:
                self._yellow.add(letter)
            else:
                self._dark_grey.add(letter)
