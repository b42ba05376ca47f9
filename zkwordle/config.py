"""
설정 관리
=========

모든 설정은 환경 변수에서 읽으며 기본값을 가진다.
작업 디렉터리의 .env 파일이 있으면 먼저 로드한다.
"""

import os

from dotenv import load_dotenv

from zkwordle.protocol.signals import MEMBERSHIP_ROOT

load_dotenv()


class Config:

    # 게임 서버
    SERVER_URL = os.getenv("ZKWORDLE_SERVER_URL", "http://localhost:4000")
    REQUEST_TIMEOUT = float(os.getenv("ZKWORDLE_REQUEST_TIMEOUT", 10))

    # 검증 키 (snarkjs verification_key.json)
    CLUE_VK_PATH = os.getenv("ZKWORDLE_CLUE_VK", "keys/clue_verification_key.json")
    MEMBERSHIP_VK_PATH = os.getenv("ZKWORDLE_MEMBERSHIP_VK", "keys/membership_verification_key.json")
    MEMBERSHIP_ROOT = os.getenv("ZKWORDLE_MEMBERSHIP_ROOT", MEMBERSHIP_ROOT)

    # 허용 단어 목록 (None이면 패키지에 포함된 목록)
    WORDLIST_PATH = os.getenv("ZKWORDLE_WORDLIST")

    # 검증 기록 (TinyDB)
    TRANSCRIPT_PATH = os.getenv("ZKWORDLE_TRANSCRIPT", "transcript.json")

    LOG_LEVEL = os.getenv("ZKWORDLE_LOG_LEVEL", "INFO")


class TestingConfig(Config):
    SERVER_URL = "http://zkwordle.test"
    TRANSCRIPT_PATH = None
    LOG_LEVEL = "DEBUG"
