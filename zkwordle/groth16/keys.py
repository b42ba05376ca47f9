"""
Groth16 검증 키(verifying key)
==============================

snarkjs가 내보내는 ``verification_key.json`` 문서를 py_ecc 점으로 역직렬화한다.

문서 형식 (사영 좌표, z = 1)::

    {
      "protocol": "groth16", "curve": "bn128", "nPublic": 2,
      "vk_alpha_1": [x, y, "1"],
      "vk_beta_2":  [[x0, x1], [y0, y1], ["1", "0"]],
      "vk_gamma_2": ..., "vk_delta_2": ...,
      "IC": [[x, y, "1"], ...]          # nPublic + 1 개
    }

키는 프로세스 시작 시 한 번 로드되며 이후 변경되지 않는다.
형식이 잘못된 키는 공격이 아니라 설정 오류이므로 VerifyingKeyError로 실패한다.
"""

import json
import logging
from collections import namedtuple

from zkwordle.errors import VerifyingKeyError
from zkwordle.groth16.field import g1_point, g2_point, is_g1, is_g2, ec_pairing

logger = logging.getLogger(__name__)

KeyRing = namedtuple("KeyRing", ["clue", "membership"])


class VerifyingKey:
    """Groth16 검증 키.

    속성:
        alpha_1: G1 점 [α]₁
        beta_2, gamma_2, delta_2: G2 점 [β]₂, [γ]₂, [δ]₂
        ic: 공개 입력별 기저 G1 점 리스트 (IC[0]은 상수항)
        n_public: 공개 입력 개수
    """

    def __init__(self, alpha_1, beta_2, gamma_2, delta_2, ic, name="groth16"):
        if len(ic) < 1:
            raise VerifyingKeyError("{}: IC must contain at least one point".format(name))
        self.alpha_1 = alpha_1
        self.beta_2 = beta_2
        self.gamma_2 = gamma_2
        self.delta_2 = delta_2
        self.ic = tuple(ic)
        self.name = name
        self._alphabeta = None

    @property
    def n_public(self):
        return len(self.ic) - 1

    @property
    def alphabeta(self):
        """e([α]₁, [β]₂). 키마다 한 번만 계산한다."""
        if self._alphabeta is None:
            self._alphabeta = ec_pairing(self.beta_2, self.alpha_1)
        return self._alphabeta

    @classmethod
    def from_snarkjs(cls, data, name="groth16"):
        if not isinstance(data, dict):
            raise VerifyingKeyError("{}: key document must be an object".format(name))
        if data.get("protocol", "groth16") != "groth16":
            raise VerifyingKeyError("{}: unsupported protocol {!r}".format(name, data.get("protocol")))
        if data.get("curve", "bn128") not in ("bn128", "bn254"):
            raise VerifyingKeyError("{}: unsupported curve {!r}".format(name, data.get("curve")))

        try:
            alpha_1 = _g1(data["vk_alpha_1"])
            beta_2 = _g2(data["vk_beta_2"])
            gamma_2 = _g2(data["vk_gamma_2"])
            delta_2 = _g2(data["vk_delta_2"])
            ic = [_g1(p) for p in data["IC"]]
        except KeyError as e:
            raise VerifyingKeyError("{}: missing field {}".format(name, e)) from e
        except (TypeError, ValueError, IndexError) as e:
            raise VerifyingKeyError("{}: {}".format(name, e)) from e

        n_public = data.get("nPublic", len(ic) - 1)
        if n_public != len(ic) - 1:
            raise VerifyingKeyError(
                "{}: nPublic is {} but IC holds {} points".format(name, n_public, len(ic)))

        return cls(alpha_1, beta_2, gamma_2, delta_2, ic, name=name)


def _affine(coords, one):
    if len(coords) == 3:
        z = [str(c) for c in coords[2]] if isinstance(coords[2], list) else str(coords[2])
        if z != one:
            raise ValueError("only affine points (z = {}) are supported".format(one))
        coords = coords[:2]
    if len(coords) != 2:
        raise ValueError("expected 2 or 3 coordinates, got {}".format(len(coords)))
    return coords


def _g1(coords):
    point = g1_point(*_affine(coords, "1"))
    if not is_g1(point):
        raise ValueError("G1 point not on curve: {}".format(coords))
    return point


def _g2(coords):
    point = g2_point(*_affine(coords, ["1", "0"]))
    if not is_g2(point):
        raise ValueError("G2 point not in subgroup: {}".format(coords))
    return point


def load_verifying_key(path, name=None):
    name = name or str(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise VerifyingKeyError("{}: cannot read key file: {}".format(name, e)) from e
    except json.JSONDecodeError as e:
        raise VerifyingKeyError("{}: invalid JSON: {}".format(name, e)) from e
    vk = VerifyingKey.from_snarkjs(data, name=name)
    logger.info("Loaded verifying key %s (%d public inputs)", name, vk.n_public)
    return vk


def load_keyring(clue_path, membership_path):
    return KeyRing(
        clue=load_verifying_key(clue_path, name="clue"),
        membership=load_verifying_key(membership_path, name="membership"),
    )
