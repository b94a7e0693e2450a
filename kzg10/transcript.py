"""
KZG10 Fiat-Shamir 트랜스크립트
===============================

비대화식 평가 점(challenge)을 공개 커밋먼트로부터 도출한다.

**Fiat-Shamir 변환**:
  대화식 프로토콜에서는 검증자가 커밋먼트를 받은 뒤 랜덤 평가 점을
  보낸다. 여기서는 프로버와 검증자가 모두 세 커밋먼트를 해싱해서
  같은 점을 스스로 계산한다. 입력은 공개 커밋먼트뿐이므로 비밀 값에
  접근하지 않는다.

**인코딩**:
  각 G1 점은 정규 64바이트 (x ‖ y) 인코딩으로 흡수된다.
  좌표를 10진 문자열로 이어 붙이지 않으므로 표현이 모호하지 않다.

사용 예시:
    >>> z = derive_challenge(commit_a, commit_b, commit_c)
"""

import hashlib

from kzg10.field import FR, CURVE_ORDER
from kzg10.encoding import encode_g1


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열
    """

    def __init__(self, label=b"kzg10"):
        self.state = bytearray()
        self.state.extend(label)

    def append_point(self, label, point):
        """G1 점을 레이블과 함께 추가한다 (무한원점은 64바이트의 0)."""
        self.state.extend(label)
        self.state.extend(encode_g1(point))

    def challenge_scalar(self, label):
        """현재 상태를 해싱해 FR 챌린지를 만든다.

        다이제스트는 상태에 다시 추가되므로 연속 호출은 서로 다른 값을 낸다.
        """
        self.state.extend(label)
        h = hashlib.sha256(bytes(self.state)).digest()
        challenge = FR(int.from_bytes(h, "big") % CURVE_ORDER)
        self.state.extend(h)
        return challenge


def derive_challenge(commit_a, commit_b, commit_c):
    """세 커밋먼트로부터 평가 점을 도출한다.

    같은 세 커밋먼트는 항상 같은 FR을 낸다. 순서가 바뀌면 다른 점이 된다.
    """
    transcript = Transcript()
    transcript.append_point(b"commit_a", commit_a)
    transcript.append_point(b"commit_b", commit_b)
    transcript.append_point(b"commit_c", commit_c)
    return transcript.challenge_scalar(b"point")
