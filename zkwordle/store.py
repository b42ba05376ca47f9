"""
검증 기록(transcript) 저장소
============================

검증을 통과한 커밋먼트와 추측(clue 증명 포함)을 TinyDB에 남긴다.
나중에 audit()으로 기록된 모든 증명을 오프라인에서 다시 검증할 수 있다.

테이블:
  commitments: {"session_id", "commitment", "proof", "state"}
  guesses:     {"session_id", "index", "word", "clue", "proof"}
"""

import logging

from tinydb import TinyDB, Query
from tinydb.storages import MemoryStorage

from zkwordle.groth16.verifying import verify
from zkwordle.protocol.signals import build_clue_signals, build_membership_signals
from zkwordle.protocol.types import Clue, Proof

logger = logging.getLogger(__name__)

Record = Query()


# ─── Proof ───

def serialize_proof(proof):
    return proof.to_dict()


def deserialize_proof(data):
    return Proof.from_dict(data)


class TranscriptStore:

    def __init__(self, db):
        self.db = db
        self.commitments = db.table("commitments")
        self.guesses = db.table("guesses")

    @classmethod
    def open(cls, path):
        return cls(TinyDB(path))

    @classmethod
    def in_memory(cls):
        return cls(TinyDB(storage=MemoryStorage))

    def close(self):
        self.db.close()

    def record_commitment(self, commitment, state):
        self.commitments.upsert({
            "session_id": commitment.session_id,
            "commitment": commitment.value,
            "proof": serialize_proof(commitment.proof),
            "state": state.value,
        }, Record.session_id == commitment.session_id)

    def record_guess(self, session_id, word, clue):
        index = self.guesses.count(Record.session_id == session_id)
        self.guesses.insert({
            "session_id": session_id,
            "index": index,
            "word": word,
            "clue": list(clue.raw_signal),
            "proof": serialize_proof(clue.proof),
        })

    def commitment(self, session_id):
        rows = self.commitments.search(Record.session_id == session_id)
        if not rows:
            return None
        return rows[0]

    def session_guesses(self, session_id):
        rows = self.guesses.search(Record.session_id == session_id)
        return sorted(rows, key=lambda r: r["index"])

    def sessions(self):
        return [row["session_id"] for row in self.commitments.all()]

    def audit(self, session_id, keys, root_hash):
        """기록된 세션의 모든 증명을 다시 검증한다. 모두 통과해야 True."""
        row = self.commitment(session_id)
        if row is None:
            logger.warning("No commitment recorded for session %s", session_id)
            return False

        commitment = row["commitment"]
        signals = build_membership_signals(root_hash, commitment)
        if not verify(keys.membership, signals, deserialize_proof(row["proof"])):
            logger.warning("Recorded membership proof for session %s does not verify", session_id)
            return False

        for guess in self.session_guesses(session_id):
            clue = Clue.from_raw(guess["clue"], deserialize_proof(guess["proof"]))
            signals = build_clue_signals(guess["word"], clue, commitment)
            if not verify(keys.clue, signals, clue.proof):
                logger.warning("Recorded clue proof for %s in session %s does not verify",
                               guess["word"], session_id)
                return False
        return True
