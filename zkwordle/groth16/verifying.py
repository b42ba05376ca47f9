import logging

from zkwordle.errors import SignalLengthError
from zkwordle.groth16.field import (
    CURVE_ORDER,
    ec_add,
    ec_mul,
    ec_pairing,
    try_g1,
    try_g2,
)

logger = logging.getLogger(__name__)

# r의 10진수 자릿수. 이보다 긴 문자열은 int 변환 없이 거부한다
MAX_SIGNAL_DIGITS = len(str(CURVE_ORDER))


def proof_points(proof):
    """Proof → (A, B, C) py_ecc 점. 하나라도 유효하지 않으면 None."""
    # G1 점을 먼저 확인한다. G2 부분군 검사가 훨씬 비싸다
    prf_A = try_g1(proof.a)
    if prf_A is None:
        return None
    prf_C = try_g1(proof.c)
    if prf_C is None:
        return None
    prf_B = try_g2(proof.b)
    if prf_B is None:
        return None
    return prf_A, prf_B, prf_C


def signal_scalars(signals):
    scalars = []
    for s in signals:
        s = str(s)
        if not (s.isascii() and s.isdigit()):
            return None
        digits = s.lstrip("0") or "0"
        if len(digits) > MAX_SIGNAL_DIGITS:
            return None
        n = int(digits)
        if n >= CURVE_ORDER:
            return None
        scalars.append(n)
    return scalars


def linear_combination(ic, scalars):
    # vk_x = IC[0] + Σ sᵢ·IC[i+1]
    vk_x = ic[0]
    for point, s in zip(ic[1:], scalars):
        vk_x = ec_add(vk_x, ec_mul(point, s))
    return vk_x


def lhs(prf_A, prf_B):
    return ec_pairing(prf_B, prf_A)


def rhs(vk, prf_C, vk_x):
    return vk.alphabeta * ec_pairing(vk.gamma_2, vk_x) * ec_pairing(vk.delta_2, prf_C)


def verify(vk, signals, proof):
    """Groth16 증명을 검증한다.

    e(A, B) == e(α, β) · e(vk_x, γ) · e(C, δ)

    유효하지 않은 증명은 예외 없이 False를 돌려준다. 신호 개수가 키와 맞지 않는
    경우만 설정 오류로 보고 SignalLengthError를 던진다.
    """
    signals = list(signals)
    if len(signals) != vk.n_public:
        raise SignalLengthError(vk.n_public, len(signals))

    scalars = signal_scalars(signals)
    if scalars is None:
        logger.warning("%s: public signals are not field elements", vk.name)
        return False

    points = proof_points(proof)
    if points is None:
        logger.warning("%s: proof points are not valid curve points", vk.name)
        return False
    prf_A, prf_B, prf_C = points

    vk_x = linear_combination(vk.ic, scalars)
    return lhs(prf_A, prf_B) == rhs(vk, prf_C, vk_x)
