"""
SRS 윈도우: 다항식 계수와 SRS 원소의 정렬
===========================================

commit과 generate_witness는 같은 다중 스칼라 곱(MSM)을 하지만
SRS에서 읽기 시작하는 위치가 한 칸 다르다.

    commit            :  Σ_{i=1}^{d} coeff[d-i] · g1[i-1]     (offset 0)
    generate_witness  :  Σ_{i=2}^{d} psi[d-i]   · g1[i-2]     (offset 1)

몫 다항식 ψ는 원래 다항식보다 차수가 하나 낮으므로 그 상수항이
g1[0]에 맞춰져야 한다. 인덱스 계산은 이 모듈에만 둔다.
"""

from kzg10.field import FR, ec_mul, ec_add


def srs_window(offset, degree):
    """(계수 인덱스, SRS 인덱스) 쌍을 만든다.

    i = offset+1 .. degree 에 대해 (degree - i, i - 1 - offset) 를 낸다.
    계수 인덱스는 최고차 우선 리스트의 위치이고, SRS 인덱스는
    g1_powers의 위치(= x의 지수)이다.

    예시:
        >>> list(srs_window(0, 3))
        [(2, 0), (1, 1), (0, 2)]
        >>> list(srs_window(1, 3))
        [(1, 0), (0, 1)]
    """
    for i in range(offset + 1, degree + 1):
        yield degree - i, i - 1 - offset


def msm(points, coeffs, offset, degree):
    """윈도우를 따라 다중 스칼라 곱을 누적한다.

    계수가 0인 항은 건너뛴다. 모든 계수가 0이면 항등원(None)을 반환한다.
    """
    result = None  # 항등원
    for coeff_index, srs_index in srs_window(offset, degree):
        coeff = coeffs[coeff_index]
        if coeff == FR(0):
            continue
        result = ec_add(result, ec_mul(points[srs_index], coeff))
    return result
