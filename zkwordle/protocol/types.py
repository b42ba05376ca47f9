from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from zkwordle.errors import MalformedResponse

WORD_LENGTH = 5
MAX_GUESSES = 6


class Color(Enum):
    GREY = "#808080"
    DARK_GREY = "#404040"
    GREEN = "#118811"
    YELLOW = "#DDDD00"


# 회로가 출력하는 clue 숫자 → 표시 색상
DIGIT_COLORS = {
    0: Color.DARK_GREY,
    1: Color.YELLOW,
    2: Color.GREEN,
}


def color_for(digit):
    return DIGIT_COLORS.get(digit, Color.DARK_GREY)


def colors_for(raw_signal):
    return tuple(color_for(d) for d in raw_signal)


def check_colors(colors):
    """서버가 보낸 clue 숫자 검사: 정확히 WORD_LENGTH개의 0, 1, 2."""
    if (not isinstance(colors, (list, tuple)) or len(colors) != WORD_LENGTH
            or any(type(d) is not int or d not in (0, 1, 2) for d in colors)):
        raise MalformedResponse("colors must be {} digits in 0..2, got {!r}".format(WORD_LENGTH, colors))
    return tuple(colors)


class VerificationState(Enum):
    UNCHECKED = "unchecked"
    VERIFIED = "verified"
    INVALID = "invalid"
    STALE = "stale"


class Reason(Enum):
    INVALID_GUESS = "invalid_guess"
    WRONG_LENGTH = "wrong_length"
    BUSY = "busy"
    STALE = "stale"
    UNTRUSTED = "untrusted"
    FINISHED = "finished"
    NOT_STARTED = "not_started"


@dataclass(frozen=True)
class WireProof:
    """서버가 보내는 텍스트 형태의 증명 (a: G1, b: G2, c: G1)."""
    a: str
    b: str
    c: str

    @classmethod
    def from_json(cls, data):
        return cls(a=data["a"], b=data["b"], c=data["c"])


@dataclass(frozen=True)
class Proof:
    """Groth16 증명: 10진수 좌표 문자열로 된 세 개의 곡선 점."""
    a: Tuple[str, str]
    b: Tuple[Tuple[str, str], Tuple[str, str]]
    c: Tuple[str, str]

    def to_dict(self):
        return {
            "a": list(self.a),
            "b": [list(self.b[0]), list(self.b[1])],
            "c": list(self.c),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            a=tuple(data["a"]),
            b=(tuple(data["b"][0]), tuple(data["b"][1])),
            c=tuple(data["c"]),
        )


@dataclass(frozen=True)
class Commitment:
    value: str
    proof: Proof
    session_id: str


@dataclass(frozen=True)
class Clue:
    raw_signal: Tuple[int, ...]
    colors: Tuple[Color, ...]
    proof: Proof

    @classmethod
    def from_raw(cls, raw_signal, proof):
        raw_signal = tuple(raw_signal)
        return cls(raw_signal=raw_signal, colors=colors_for(raw_signal), proof=proof)


@dataclass(frozen=True)
class Guess:
    word: str
    colors: Tuple[Color, ...]

    @property
    def solved(self):
        return all(c is Color.GREEN for c in self.colors)


@dataclass(frozen=True)
class GuessResult:
    accepted: bool
    colors: Optional[Tuple[Color, ...]] = None
    reason: Optional[Reason] = None
    guess: Optional[Guess] = field(default=None, compare=False)

    @classmethod
    def rejected(cls, reason):
        return cls(accepted=False, reason=reason)
