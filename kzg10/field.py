"""
KZG10 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
========================================================

KZG 커밋먼트 스킴이 외부 협력자로 사용하는 대수적 도구를 정의한다.
모든 연산은 py_ecc의 bn128 (alt_bn128) 구현에 위임한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 다항식 계수, 평가 점, 트랩도어가
  모두 이 필드의 원소이다.

**타원곡선 그룹**:
  - G1: FQ 위의 점, 커밋먼트와 증명(witness)이 속하는 그룹
  - G2: FQ2 위의 점, SRS의 검증용 원소가 속하는 그룹
  - GT: FQ12 원소, 페어링의 결과
  py_ecc에서 G1/G2의 항등원(무한원점)은 None이다.

사용 예시:
    >>> from kzg10.field import FR, G1, ec_mul
    >>> P = ec_mul(G1, FR(5))  # 5·G1
"""

import secrets

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128, optimized_bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하므로 +, -, *, /, ** 와 FR.zero(), FR.one()을
    그대로 사용할 수 있다.
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# 기저 필드 위수 (좌표 크기)
FIELD_MODULUS = FQ.field_modulus


def random_fr(nonzero=True):
    """균등 분포의 FR 원소를 뽑는다.

    Args:
        nonzero: True이면 0을 제외한다 (트랩도어, 생성자 스칼라용).

    Returns:
        FR: 랜덤 필드 원소
    """
    if nonzero:
        return FR(secrets.randbelow(CURVE_ORDER - 1) + 1)
    return FR(secrets.randbelow(CURVE_ORDER))


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1
G2 = bn128.G2

# 항등원 (point at infinity)
Z1 = None


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점 (None 허용)
        scalar: 정수 또는 FR 원소

    Returns:
        같은 그룹의 점. scalar가 0이면 None.
    """
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2 (어느 쪽이든 None이면 다른 쪽을 반환)."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


def ec_sub(p1, p2):
    """타원곡선 점 뺄셈: p1 - p2."""
    return bn128.add(p1, bn128.neg(p2))


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
        결과는 최종 지수승(final exponentiation)까지 적용된 FQ12 원소이므로
        여러 페어링의 곱을 == 로 바로 비교할 수 있다.
    """
    return bn128.pairing(g2_point, g1_point)


def random_g1():
    """G1의 랜덤 생성자 (항등원이 아닌 표준 생성자의 배수)."""
    return ec_mul(G1, random_fr())


def random_g2():
    """G2의 랜덤 생성자."""
    return ec_mul(G2, random_fr())


def is_on_g1(point):
    """점이 G1 곡선 위에 있는지 확인한다 (None은 항등원으로 허용)."""
    if point is None:
        return True
    return bn128.is_on_curve(point, bn128.b)


def is_on_g2(point):
    """점이 G2 (twist) 곡선 위에 있고 위수 r의 부분군에 속하는지 확인한다.

    G1은 cofactor가 1이라 곡선 검사로 충분하지만, twist 곡선은 cofactor가
    커서 곡선 위의 점이라도 G2 밖에 있을 수 있다.
    """
    if point is None:
        return True
    if not bn128.is_on_curve(point, bn128.b2):
        return False
    return _in_g2_subgroup(point)


def _in_g2_subgroup(point):
    # (r-1)·P == -P  <=>  r·P == O  (projective 좌표로 계산)
    x, y = point
    jacobian = (
        optimized_bn128.FQ2([int(c) for c in x.coeffs]),
        optimized_bn128.FQ2([int(c) for c in y.coeffs]),
        optimized_bn128.FQ2.one(),
    )
    lhs = optimized_bn128.normalize(optimized_bn128.multiply(jacobian, CURVE_ORDER - 1))
    rhs = optimized_bn128.normalize(optimized_bn128.neg(jacobian))
    return lhs == rhs
