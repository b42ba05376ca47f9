import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from py_ecc import bn128

from zkwordle.errors import StaleSession
from zkwordle.groth16.field import FR
from zkwordle.groth16.keys import VerifyingKey
from zkwordle.protocol import codec
from zkwordle.protocol.signals import MEMBERSHIP_ROOT, build_clue_signals, build_membership_signals
from zkwordle.protocol.types import Clue, Proof
from zkwordle.transport import ClueResponse, StartResponse

g1 = bn128.G1
g2 = bn128.G2
mult = bn128.multiply


# ── 테스트 상수 ──
TOXIC_ALPHA = 3926
TOXIC_BETA = 3604
TOXIC_GAMMA = 2971
TOXIC_DELTA = 1357

PROVER_R = 4106
PROVER_S = 4565

CLUE_PUBLIC = 11
MEMBERSHIP_PUBLIC = 2

COMMITMENT = "12345678901234567890123456789012345678901234567890"
SESSION_ID = "42"


def serialize_g1(point):
    return [str(int(point[0])), str(int(point[1])), "1"]


def serialize_g2(point):
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))],
        ["1", "0"],
    ]


class TrustedSetup:
    """독성 폐기물(toxic waste)을 알고 있는 Groth16 설정.

    trapdoor를 알면 임의의 공개 신호에 대해 검증을 통과하는 증명을 만들 수 있다:
        c = (a·b - α·β - γ·x) / δ,   x = u₀ + Σ sᵢ·uᵢ₊₁
    """

    def __init__(self, n_public, ic_seed):
        self.alpha = FR(TOXIC_ALPHA)
        self.beta = FR(TOXIC_BETA)
        self.gamma = FR(TOXIC_GAMMA)
        self.delta = FR(TOXIC_DELTA)
        self.ic_vals = [FR(ic_seed + 97 * i) for i in range(n_public + 1)]

    def document(self):
        return {
            "protocol": "groth16",
            "curve": "bn128",
            "nPublic": len(self.ic_vals) - 1,
            "vk_alpha_1": serialize_g1(mult(g1, int(self.alpha))),
            "vk_beta_2": serialize_g2(mult(g2, int(self.beta))),
            "vk_gamma_2": serialize_g2(mult(g2, int(self.gamma))),
            "vk_delta_2": serialize_g2(mult(g2, int(self.delta))),
            "IC": [serialize_g1(mult(g1, int(u))) for u in self.ic_vals],
        }

    def prove(self, signals, r=PROVER_R, s=PROVER_S):
        a = FR(r)
        b = FR(s)
        x = self.ic_vals[0]
        for sig, u in zip(signals, self.ic_vals[1:]):
            x = x + FR(int(sig)) * u
        c = (a * b - self.alpha * self.beta - self.gamma * x) / self.delta

        prf_A = mult(g1, int(a))
        prf_B = mult(g2, int(b))
        prf_C = mult(g1, int(c))
        return Proof(
            a=tuple(serialize_g1(prf_A)[:2]),
            b=tuple(tuple(coords) for coords in serialize_g2(prf_B)[:2]),
            c=tuple(serialize_g1(prf_C)[:2]),
        )


@pytest.fixture(scope="session")
def clue_setup():
    return TrustedSetup(CLUE_PUBLIC, ic_seed=1111)


@pytest.fixture(scope="session")
def membership_setup():
    return TrustedSetup(MEMBERSHIP_PUBLIC, ic_seed=2222)


@pytest.fixture(scope="session")
def clue_key(clue_setup):
    return VerifyingKey.from_snarkjs(clue_setup.document(), name="clue")


@pytest.fixture(scope="session")
def membership_key(membership_setup):
    return VerifyingKey.from_snarkjs(membership_setup.document(), name="membership")


@pytest.fixture(scope="session")
def membership_proof(membership_setup):
    return membership_setup.prove(build_membership_signals(MEMBERSHIP_ROOT, COMMITMENT))


@pytest.fixture(scope="session")
def prove_clue(clue_setup):
    """(word, raw clue) → 검증을 통과하는 ClueResponse."""
    def _prove(word, raw, commitment=COMMITMENT):
        dummy = Clue.from_raw(raw, None)
        proof = clue_setup.prove(build_clue_signals(word, dummy, commitment))
        return ClueResponse(colors=tuple(raw), proof=codec.format_wire(proof))
    return _prove


@pytest.fixture
def start_response(membership_proof):
    return StartResponse(commitment=COMMITMENT, proof=codec.format_wire(membership_proof),
                         session_id=SESSION_ID)


class FakeServer:
    """메모리 안의 게임 서버. gate가 있으면 clue 응답을 그때까지 붙잡아 둔다."""

    def __init__(self, start_response, clues=None):
        self.start_response = start_response
        self.clues = dict(clues or {})
        self.requests = []
        self.starts = 0
        self.stale = False
        self.gate = None

    async def start(self):
        self.starts += 1
        return self.start_response

    async def request_clue(self, guess, session_id):
        self.requests.append((guess, session_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.stale:
            raise StaleSession("unknown session {}".format(session_id))
        return self.clues[guess]


@pytest.fixture
def server(start_response):
    return FakeServer(start_response)
