"""
KZG10 커밋먼트 키 (Structured Reference String)
=================================================

**커밋먼트 키란?**
  비밀 트랩도어 a로부터 만든 공개 파라미터이다.

  CommitmentKey = {
      g1_powers: [g1, a·g1, a²·g1, ..., a^t·g1]
      g2_powers: [g2, a·g2, a²·g2, ..., a^t·g2]
  }

  검증은 g2_powers[0], g2_powers[1]만 사용하지만, 대칭성을 위해
  t+1개를 모두 만들어 보관한다.

**보안 불변식**:
  트랩도어 a는 setup 함수의 지역 변수로만 존재하며 키에 저장되지 않는다.
  a가 유출되면 이 키로 만든 모든 커밋먼트의 건전성(soundness)이 깨진다.
  키는 생성 후 읽기 전용이므로 여러 commit/witness/verify 호출이
  동기화 없이 공유할 수 있다.

사용 예시:
    >>> key = setup(4)
    >>> key.G1_size()  # 5
"""

import hashlib

from kzg10.field import (
    FR, G1, G2, CURVE_ORDER,
    ec_mul, random_fr, random_g1, random_g2,
)
from kzg10.errors import InvalidDegree, MalformedInput
from kzg10.encoding import (
    G1_BYTES, G2_BYTES,
    encode_g1, decode_g1,
    encode_g2, decode_g2,
)


_COUNT_BYTES = 4


class CommitmentKey:
    """KZG10 공개 파라미터.

    속성:
        g1_powers: G1 원소 튜플 [g1, a·g1, ..., a^t·g1]
        g2_powers: G2 원소 튜플 [g2, a·g2, ..., a^t·g2]
    """

    def __init__(self, g1_powers, g2_powers):
        if len(g1_powers) < 1 or len(g2_powers) < 1:
            raise MalformedInput("커밋먼트 키에는 G1, G2 원소가 각각 하나 이상 필요합니다")
        # 모든 원소는 생성자의 거듭제곱이므로 항등원일 수 없다.
        if any(p is None for p in g1_powers) or any(p is None for p in g2_powers):
            raise MalformedInput("커밋먼트 키에 항등원(무한원점)이 있습니다")
        self.g1_powers = tuple(g1_powers)
        self.g2_powers = tuple(g2_powers)

    def G1_size(self):
        return len(self.g1_powers)

    def G2_size(self):
        return len(self.g2_powers)

    def GT_size(self):
        return 1

    def size_in_bits(self):
        """정규 인코딩 기준 키 크기 (비트)."""
        return 8 * (self.G1_size() * G1_BYTES + self.G2_size() * G2_BYTES)

    def __eq__(self, other):
        if not isinstance(other, CommitmentKey):
            return NotImplemented
        return self.g1_powers == other.g1_powers and self.g2_powers == other.g2_powers

    __hash__ = None

    def __repr__(self):
        return f"CommitmentKey(G1={self.G1_size()}, G2={self.G2_size()})"

    # ─── 정규 인코딩 ───

    def to_bytes(self):
        """G1 개수 ‖ G2 개수 ‖ G1 원소들 ‖ G2 원소들"""
        out = bytearray()
        out.extend(self.G1_size().to_bytes(_COUNT_BYTES, "big"))
        out.extend(self.G2_size().to_bytes(_COUNT_BYTES, "big"))
        for p in self.g1_powers:
            out.extend(encode_g1(p))
        for p in self.g2_powers:
            out.extend(encode_g2(p))
        return bytes(out)

    @classmethod
    def from_bytes(cls, data):
        data = bytes(data)
        header = 2 * _COUNT_BYTES
        if len(data) < header:
            raise MalformedInput("커밋먼트 키 헤더가 잘렸습니다")
        n1 = int.from_bytes(data[:_COUNT_BYTES], "big")
        n2 = int.from_bytes(data[_COUNT_BYTES:header], "big")
        expected = header + n1 * G1_BYTES + n2 * G2_BYTES
        if len(data) != expected:
            raise MalformedInput(
                f"커밋먼트 키 길이가 잘못되었습니다: {len(data)} != {expected}"
            )

        pos = header
        g1_powers = []
        for _ in range(n1):
            g1_powers.append(decode_g1(data[pos:pos + G1_BYTES]))
            pos += G1_BYTES
        g2_powers = []
        for _ in range(n2):
            g2_powers.append(decode_g2(data[pos:pos + G2_BYTES]))
            pos += G2_BYTES
        return cls(g1_powers, g2_powers)


def _seeded_scalar(seed, label):
    h = hashlib.sha256(f"{seed}:{label}".encode()).digest()
    return FR(int.from_bytes(h, "big") % (CURVE_ORDER - 1) + 1)


def setup(t, seed=None):
    """KZG10 커밋먼트 키를 생성한다.

    G1 생성자, G2 생성자, 트랩도어 a를 뽑은 뒤 a^i를 누적하면서
    생성자에 곱한다 (매번 거듭제곱을 새로 계산하지 않는다).

    Args:
        t: 최대 차수 경계 (>= 1). 길이 t까지의 다항식을 커밋할 수 있다.
        seed: 결정론적 생성을 위한 시드 (테스트용).
              None이면 secrets로 뽑는다.

    Returns:
        CommitmentKey: g1_powers, g2_powers가 각각 t+1개인 키

    Raises:
        InvalidDegree: t가 1 미만이거나 정수가 아닐 때
    """
    if isinstance(t, bool) or not isinstance(t, int):
        raise InvalidDegree(f"차수 경계는 정수여야 합니다: {t!r}")
    if t < 1:
        raise InvalidDegree(f"차수 경계는 1 이상이어야 합니다: {t}")

    if seed is not None:
        generator1 = ec_mul(G1, _seeded_scalar(seed, "g1"))
        generator2 = ec_mul(G2, _seeded_scalar(seed, "g2"))
        a = _seeded_scalar(seed, "trapdoor")
    else:
        generator1 = random_g1()
        generator2 = random_g2()
        a = random_fr()

    g1_powers = [generator1]
    g2_powers = [generator2]
    a_power = FR(1)
    for _ in range(t):
        a_power = a_power * a
        g1_powers.append(ec_mul(generator1, a_power))
        g2_powers.append(ec_mul(generator2, a_power))

    # 트랩도어 폐기 (toxic waste)
    del a, a_power

    return CommitmentKey(g1_powers, g2_powers)
