"""
zkwordle 예외 계층
==================

  ZkWordleError
  ├── MalformedResponse      서버 응답 형식 오류 (로컬, 치명적)
  │   └── MalformedProof     증명 문자열 파싱 실패
  ├── VerificationFailed     페어링 검사 실패 ("서버가 거짓말을 한다")
  ├── StaleSession           커밋먼트가 교체됨 (세션 재시작 필요)
  ├── InvalidGuess           사전에 없는 단어 (로컬, 일시적)
  ├── TransportError         네트워크 응답을 받지 못함
  └── ConfigurationError     검증 키/신호 설정 오류
      ├── VerifyingKeyError
      └── SignalLengthError
"""


class ZkWordleError(Exception):
    pass


class MalformedResponse(ZkWordleError):
    pass


class MalformedProof(MalformedResponse):
    pass


class VerificationFailed(ZkWordleError):
    pass


class StaleSession(ZkWordleError):
    pass


class InvalidGuess(ZkWordleError):
    pass


class TransportError(ZkWordleError):
    pass


class ConfigurationError(ZkWordleError):
    pass


class VerifyingKeyError(ConfigurationError):
    pass


class SignalLengthError(ConfigurationError):
    def __init__(self, expected, actual):
        super().__init__(
            "verifying key expects {} public signals, got {}".format(expected, actual))
        self.expected = expected
        self.actual = actual
