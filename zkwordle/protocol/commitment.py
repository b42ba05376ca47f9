"""
커밋먼트 세션
=============

세션 시작 시 한 번 수행하는 핸드셰이크:

  1. 서버에서 커밋먼트 + membership 증명을 받는다 (state = UNCHECKED)
  2. [root, commitment] 신호로 membership 키에 대해 검증한다
       True  → VERIFIED
       False → INVALID   (서버가 거짓말을 한다, 세션 동안 유지)
  3. clue 요청이 "세션 없음"을 보고하면 → STALE (세션 재시작 필요)

상태 전이::

    UNCHECKED ──┬──> VERIFIED ──┐
                └──> INVALID  ──┼──> STALE
                                ┘
"""

import asyncio
import logging

from zkwordle.groth16.verifying import verify
from zkwordle.protocol import codec
from zkwordle.protocol.signals import MEMBERSHIP_ROOT, build_membership_signals
from zkwordle.protocol.types import Commitment, VerificationState

logger = logging.getLogger(__name__)


class CommitmentSession:

    def __init__(self, server, membership_key, root_hash=MEMBERSHIP_ROOT,
                 verifier=verify, store=None):
        self.server = server
        self.membership_key = membership_key
        self.root_hash = root_hash
        self.verifier = verifier
        self.store = store
        self.commitment = None
        self.state = VerificationState.UNCHECKED

    @property
    def session_id(self):
        return self.commitment.session_id if self.commitment else None

    @property
    def trusted(self):
        return self.state is VerificationState.VERIFIED

    async def start(self):
        """새 커밋먼트를 받아 검증하고 최종 상태를 돌려준다.

        이전 커밋먼트는 통째로 교체된다. 증명 파싱 실패는 MalformedProof로
        전파된다 (거짓 증명이 아니라 전송/형식 오류).
        """
        self.commitment = None
        self.state = VerificationState.UNCHECKED

        start = await self.server.start()
        proof = codec.parse(start.proof)
        commitment = Commitment(value=start.commitment, proof=proof, session_id=start.session_id)
        self.commitment = commitment

        signals = build_membership_signals(self.root_hash, commitment.value)
        valid = await asyncio.to_thread(self.verifier, self.membership_key, signals, proof)

        if self.commitment is not commitment:
            # 검증 도중 다른 start()가 커밋먼트를 교체했다
            return self.state

        if valid:
            self.state = VerificationState.VERIFIED
            logger.info("Commitment %s verified for session %s", commitment.value, commitment.session_id)
        else:
            self.state = VerificationState.INVALID
            logger.warning("Membership proof for session %s failed: the server is lying",
                           commitment.session_id)

        self._record()
        return self.state

    def mark_invalid(self):
        if self.state is not VerificationState.STALE:
            self.state = VerificationState.INVALID
            self._record()

    def mark_stale(self):
        self.state = VerificationState.STALE
        logger.warning("Session %s is stale: the committed word was rotated", self.session_id)
        self._record()

    def _record(self):
        if self.store is not None and self.commitment is not None:
            self.store.record_commitment(self.commitment, self.state)
