"""
KZG10 다항식 헬퍼
==================

KZG10 알고리즘은 다항식을 FR 계수의 리스트로 다루며,
**최고차 계수를 먼저** 저장한다:

    [3, 1, 4, 1]  →  3x³ + x² + 4x + 1

길이가 degree인 리스트에서 poly[degree - i]는 x^(i-1)의 계수이다
(i = 1..degree). commit, evaluate, generate_witness가 모두
이 순서를 공유한다.

사용 예시:
    >>> from kzg10.polynomial import divide_by_linear
    >>> q, r = divide_by_linear([FR(1), FR(-3), FR(2)], FR(1))  # (x-1)(x-2)
    >>> q, r  # ([FR(1), FR(-2)], FR(0))
"""

from kzg10.field import FR
from kzg10.errors import MalformedInput


def to_fr_list(coeffs):
    """정수/FR 계수 리스트를 FR 리스트로 변환한다."""
    try:
        return [c if isinstance(c, FR) else FR(c) for c in coeffs]
    except TypeError as exc:
        raise MalformedInput(f"다항식 계수를 FR로 변환할 수 없습니다: {exc}") from exc


def multiply_polys(a, b):
    """두 다항식의 곱 (최고차 우선 표현).

    결과의 길이는 len(a) + len(b) - 1 이다. 합성곱(convolution) 회로에서
    곱 다항식 t_c = t_a + t_b - 1 을 만들 때 사용한다.

    예시:
        >>> multiply_polys([FR(1), FR(1)], [FR(1), FR(-1)])  # (x+1)(x-1)
        [FR(1), FR(0), FR(-1)]
    """
    if not a or not b:
        raise MalformedInput("빈 다항식은 곱할 수 없습니다")
    out = [FR(0)] * (len(a) + len(b) - 1)
    for i, ca in enumerate(a):
        for j, cb in enumerate(b):
            out[i + j] = out[i + j] + ca * cb
    return out


def divide_by_linear(poly, point):
    """합성 나눗셈(Ruffini): poly(x) / (x - point).

    최고차 계수부터 차례로 몫 계수를 확정하고, 그 계수에 point를 곱해
    다음 계수로 넘긴다:

        ψ[0] = p[0]
        ψ[i] = p[i] + ψ[i-1]·z        (i = 1..n-2)
        r    = p[n-1] + ψ[n-2]·z

    Args:
        poly: 최고차 우선 FR 계수 리스트 (길이 n >= 2)
        point: 나눌 일차식의 근 z

    Returns:
        (quotient, remainder): 길이 n-1의 몫 리스트와 나머지 FR
    """
    if len(poly) < 2:
        raise MalformedInput("일차식으로 나누려면 계수가 2개 이상 필요합니다")
    if not isinstance(point, FR):
        point = FR(point)

    quotient = []
    carry = FR(0)
    for coeff in poly[:-1]:
        carry = coeff + carry * point
        quotient.append(carry)
    remainder = poly[-1] + carry * point
    return quotient, remainder
