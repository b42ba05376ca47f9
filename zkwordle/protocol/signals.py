"""
공개 입력(public signal) 구성
=============================

회로와 맺은 약속이므로 순서가 바뀌면 올바른 증명도 검증에 실패한다.

clue 회로 (11개)::

    [clue₀ … clue₄, letter₀ … letter₄, commitment]

    clueᵢ   ∈ {0, 1, 2}  (없음 / 다른 위치 / 정확한 위치)
    letterᵢ = 알파벳 인덱스 ('A' → 0 … 'Z' → 25)

membership 회로 (2개)::

    [root, commitment]

    root = 유효한 정답 단어 집합의 머클 루트 (공개 상수)

순수 함수이며 입력을 거부하지 않는다. 검증은 verifier의 몫이다.
"""

# 정답 단어 집합의 머클 루트
MEMBERSHIP_ROOT = "4768437044799254023802168680693360623505449298048650929961070166353749090917"


def letter_index(letter):
    return ord(letter.upper()) - ord("A")


def build_clue_signals(guess, clue, commitment):
    """guess 단어, Clue, 커밋먼트 값 → 11개의 10진수 문자열."""
    signals = [str(d) for d in clue.raw_signal]
    signals.extend(str(letter_index(ch)) for ch in guess)
    signals.append(str(commitment))
    return signals


def build_membership_signals(root_hash, commitment):
    return [str(root_hash), str(commitment)]
