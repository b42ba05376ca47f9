"""
게임 서버 HTTP 클라이언트
=========================

  GET  /start  → {"commitment", "proof": {"a","b","c"}, "session_id" | "word_id"}
  POST /guess  {"guess", "session_id"} → {"colors": [0..2] × 5, "proof"}

세션을 모르는 서버 응답(404 / 410 / {"error": "unknown_session"})은 StaleSession으로,
응답을 받지 못한 경우는 TransportError로 변환한다. 재시도는 하지 않는다.
requests는 동기 라이브러리이므로 asyncio.to_thread 위에서 호출한다.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Tuple

import requests

from zkwordle.errors import MalformedResponse, StaleSession, TransportError
from zkwordle.groth16.verifying import MAX_SIGNAL_DIGITS
from zkwordle.protocol.types import WireProof, check_colors

logger = logging.getLogger(__name__)

STALE_STATUS = (404, 410)
UNKNOWN_SESSION = "unknown_session"


@dataclass(frozen=True)
class StartResponse:
    commitment: str
    proof: WireProof
    session_id: str


@dataclass(frozen=True)
class ClueResponse:
    colors: Tuple[int, ...]
    proof: WireProof


def parse_wire_proof(data):
    if not isinstance(data, dict) or not all(k in data for k in ("a", "b", "c")):
        raise MalformedResponse("response proof must be an object with a, b and c")
    return WireProof.from_json(data)


def parse_start(body):
    if not isinstance(body, dict):
        raise MalformedResponse("start response must be an object")
    session_id = body.get("session_id", body.get("word_id"))
    commitment = body.get("commitment")
    if session_id is None or commitment is None:
        raise MalformedResponse("start response is missing commitment or session id")
    commitment = str(commitment)
    if not (commitment.isascii() and commitment.isdigit()):
        raise MalformedResponse("commitment is not a decimal field element: {!r}".format(commitment[:80]))
    if len(commitment.lstrip("0")) > MAX_SIGNAL_DIGITS:
        raise MalformedResponse("commitment has {} digits, more than a field element".format(len(commitment)))
    return StartResponse(
        commitment=commitment,
        proof=parse_wire_proof(body.get("proof")),
        session_id=str(session_id),
    )


def parse_clue(body):
    if not isinstance(body, dict):
        raise MalformedResponse("guess response must be an object")
    if body.get("error") == UNKNOWN_SESSION:
        raise StaleSession("server no longer knows this session")
    colors = check_colors(body.get("colors"))
    return ClueResponse(colors=colors, proof=parse_wire_proof(body.get("proof")))


def _error_code(res):
    try:
        body = res.json()
    except ValueError:
        return None
    return body.get("error") if isinstance(body, dict) else None


class HttpGameServer:
    """requests 기반 게임 서버 클라이언트."""

    def __init__(self, base_url, timeout=10.0, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def _request(self, method, path, stale_status=(), **kwargs):
        url = self.base_url + path
        try:
            res = self.http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError("{} {} failed: {}".format(method, url, e)) from e

        if res.status_code in stale_status:
            raise StaleSession("{} {} returned {}".format(method, url, res.status_code))
        if not res.ok:
            if stale_status and _error_code(res) == UNKNOWN_SESSION:
                raise StaleSession("{} {} reported an unknown session".format(method, url))
            raise TransportError("{} {} returned {}".format(method, url, res.status_code))
        try:
            return res.json()
        except ValueError as e:
            raise MalformedResponse("{} {} returned invalid JSON".format(method, url)) from e

    def fetch_start(self):
        body = self._request("GET", "/start")
        start = parse_start(body)
        logger.info("Received commitment for session %s", start.session_id)
        return start

    def fetch_clue(self, guess, session_id):
        body = self._request(
            "POST", "/guess",
            stale_status=STALE_STATUS,
            json={"guess": guess.lower(), "session_id": session_id},
        )
        return parse_clue(body)

    async def start(self):
        return await asyncio.to_thread(self.fetch_start)

    async def request_clue(self, guess, session_id):
        return await asyncio.to_thread(self.fetch_clue, guess, session_id)
