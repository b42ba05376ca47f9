"""
Groth16 기반 모듈: 유한체 및 BN254 타원곡선 연산
=================================================

검증기(verifier)가 사용하는 대수적 도구를 정의한다.

**유한체 FR**:
  bn128 곡선의 스칼라 필드. 공개 입력(public signal)은 모두 이 필드의 원소이다.

**점 구성**:
  서버가 보내는 10진수 좌표 문자열을 py_ecc 점으로 변환한다.
  좌표가 필드 범위를 벗어나거나 곡선 위에 있지 않으면 None을 돌려준다
  (예외가 아니라 "유효하지 않은 증명"으로 처리하기 위함).

사용 예시:
    >>> from zkwordle.groth16.field import g1_point, is_g1
    >>> P = g1_point("1", "2")
    >>> is_g1(P)  # True
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    field_modulus = bn128.curve_order


# 스칼라 필드 위수 r
CURVE_ORDER = bn128.curve_order

# 기저 필드 위수 p
FIELD_MODULUS = FQ.field_modulus

G1 = bn128.G1
G2 = bn128.G2


def ec_mul(point, scalar):
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    return bn128.add(p1, p2)


def ec_neg(point):
    return bn128.neg(point)


def ec_pairing(g2_point, g1_point):
    """e(G1, G2) → GT. py_ecc의 인자 순서는 (G2, G1)이다."""
    return bn128.pairing(g2_point, g1_point)


def parse_coordinate(value):
    """10진수 문자열 → 정규(canonical) 기저 필드 정수.

    Raises:
        ValueError: 정수가 아니거나 [0, p) 범위 밖일 때
    """
    if isinstance(value, int) and not isinstance(value, bool):
        n = value
    elif isinstance(value, str) and value.isascii() and value.isdigit():
        n = int(value)
    else:
        raise ValueError("not a decimal coordinate: {!r}".format(value))
    if n < 0 or n >= FIELD_MODULUS:
        raise ValueError("coordinate outside the base field: {}".format(n))
    return n


def g1_point(x, y):
    """[x, y] 문자열 → G1 점 (FQ, FQ)."""
    return (FQ(parse_coordinate(x)), FQ(parse_coordinate(y)))


def g2_point(x, y):
    """[x0, x1], [y0, y1] 문자열 → G2 점 (FQ2, FQ2).

    x = x0 + x1·u 형태이며 계수 순서는 py_ecc FQ2와 같다.
    """
    return (
        bn128.FQ2([parse_coordinate(x[0]), parse_coordinate(x[1])]),
        bn128.FQ2([parse_coordinate(y[0]), parse_coordinate(y[1])]),
    )


def is_g1(point):
    # BN254의 G1은 cofactor가 1이므로 곡선 위에 있으면 충분하다
    return point is not None and bn128.is_on_curve(point, bn128.b)


def is_g2(point):
    if point is None or not bn128.is_on_curve(point, bn128.b2):
        return False
    try:
        return bn128.multiply(point, CURVE_ORDER) is None
    except TypeError:
        # 작은 위수의 점은 중간 배수에서 무한원점을 만나 double(None)이 된다
        return False


def try_g1(coords):
    try:
        point = g1_point(*coords)
    except (TypeError, ValueError):
        return None
    return point if is_g1(point) else None


def try_g2(coords):
    try:
        point = g2_point(*coords)
    except (TypeError, ValueError, IndexError):
        return None
    return point if is_g2(point) else None
