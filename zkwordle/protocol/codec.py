"""
증명 코덱 (wire proof → Proof)
===============================

서버는 arkworks 점의 Display 문자열을 그대로 보낸다::

    a: "(x, y)"
    b: "(QuadExtField(x0 + x1 * u), QuadExtField(y0 + y1 * u))"
    c: "(x, y)"

문법을 정규식으로 명시하고 전체 일치(fullmatch)만 허용한다.
좌표가 빠지거나 숫자가 아닌 토큰이 섞이면 MalformedProof. 부분적인 증명이나
0으로 채운 증명을 돌려주는 일은 없다. 수학적 유효성(곡선 위의 점인지)은
여기서 검사하지 않는다.
"""

import re

from zkwordle.errors import MalformedProof
from zkwordle.protocol.types import Proof, WireProof

_NUM = r"\s*(\d+)\s*"

G1_PATTERN = re.compile(r"\s*\(" + _NUM + "," + _NUM + r"\)\s*", re.ASCII)

_FQ2 = r"\s*(?:QuadExtField)?\(" + _NUM + r"\+" + _NUM + r"\*\s*u\s*\)\s*"

G2_PATTERN = re.compile(r"\s*\(" + _FQ2 + "," + _FQ2 + r"\)\s*", re.ASCII)


def parse_g1(text, label="g1"):
    if not isinstance(text, str):
        raise MalformedProof("{}: expected a string, got {}".format(label, type(text).__name__))
    m = G1_PATTERN.fullmatch(text)
    if m is None:
        raise MalformedProof("{}: not a G1 point: {!r}".format(label, text))
    return (m.group(1), m.group(2))


def parse_g2(text, label="g2"):
    if not isinstance(text, str):
        raise MalformedProof("{}: expected a string, got {}".format(label, type(text).__name__))
    m = G2_PATTERN.fullmatch(text)
    if m is None:
        raise MalformedProof("{}: not a G2 point: {!r}".format(label, text))
    x0, x1, y0, y1 = m.groups()
    return ((x0, x1), (y0, y1))


def parse(wire):
    """WireProof → Proof. 구조가 잘못되면 MalformedProof."""
    return Proof(
        a=parse_g1(wire.a, "a"),
        b=parse_g2(wire.b, "b"),
        c=parse_g1(wire.c, "c"),
    )


def format_g1(point):
    return "({}, {})".format(*point)


def format_g2(point):
    (x0, x1), (y0, y1) = point
    return "(QuadExtField({} + {} * u), QuadExtField({} + {} * u))".format(x0, x1, y0, y1)


def format_wire(proof):
    """Proof → WireProof (서버 Display 형식)."""
    return WireProof(a=format_g1(proof.a), b=format_g2(proof.b), c=format_g1(proof.c))
