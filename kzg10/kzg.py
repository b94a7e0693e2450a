"""
KZG10 다항식 커밋먼트 스킴
===========================

Kate-Zaverucha-Goldberg (ASIACRYPT 2010)의 단일 점, 단일 다항식 버전.

**커밋먼트**:
  C = Σ coeff · g1_powers = p(a)·g1
  트랩도어 a를 모르는 상태에서 "비밀 점에서의 평가값을 지수에" 올린다.
  바인딩(binding)이지만 하이딩(hiding)은 아니다.

**열기 증명 (Witness)**:
  "p(z) = y" 임을 증명한다:
  1. y = p(z)
  2. ψ(x) = (p(x) - y) / (x - z)   (합성 나눗셈, 나머지는 반드시 0)
  3. quotient_commit = ψ(a)·g1,  eval_commit = y·g1

**검증 (페어링)**:
  e(C, g2) == e(ψ(a)·g1, (a - z)·g2) · e(y·g1, g2)
  우변 = e(g1, g2)^(ψ(a)(a-z) + y) = e(g1, g2)^p(a) 이므로
  정직한 프로버일 때만 성립한다.

다항식은 최고차 계수 우선 리스트이며 (kzg10.polynomial 참고),
degree는 알고리즘이 읽는 계수의 개수이다.

사용 예시:
    >>> key = setup(4)
    >>> p = [FR(3), FR(1), FR(4), FR(1)]          # 3x³ + x² + 4x + 1
    >>> C = commit(key, p, 4)
    >>> w = generate_witness(key, p, FR(2), 4)
    >>> verify_evaluation(key, C, w)              # True
"""

from kzg10.field import FR, ec_mul, ec_sub, ec_pairing
from kzg10.errors import KZGError, InvalidDegree, DegreeExceedsSRS, MalformedInput
from kzg10.polynomial import to_fr_list, divide_by_linear
from kzg10.window import msm
from kzg10.encoding import (
    FR_BYTES, G1_BYTES,
    encode_fr, decode_fr,
    encode_g1, decode_g1,
)


# ─────────────────────────────────────────────────────────────────────
# Witness
# ─────────────────────────────────────────────────────────────────────

class Witness:
    """열기 증명.

    속성:
        point: 다항식을 연 평가 점 z (FR)
        eval_commit: y·g1 (G1), 주장하는 평가값을 그룹으로 올린 것
        quotient_commit: ψ(a)·g1 (G1), 몫 다항식의 커밋먼트

    quotient_commit은 같은 point와, 그것을 만든 커밋먼트와 짝지어질 때만
    의미가 있다.
    """

    ENCODED_SIZE = FR_BYTES + 2 * G1_BYTES

    def __init__(self, point, eval_commit, quotient_commit):
        self.point = point if isinstance(point, FR) else FR(point)
        self.eval_commit = eval_commit
        self.quotient_commit = quotient_commit

    def G1_size(self):
        return 2

    def size_in_bits(self):
        return 8 * self.ENCODED_SIZE

    def __eq__(self, other):
        if not isinstance(other, Witness):
            return NotImplemented
        return (
            self.point == other.point
            and self.eval_commit == other.eval_commit
            and self.quotient_commit == other.quotient_commit
        )

    __hash__ = None

    def __repr__(self):
        return f"Witness(point={int(self.point)})"

    def to_bytes(self):
        """point ‖ eval_commit ‖ quotient_commit (160바이트)"""
        return (
            encode_fr(self.point)
            + encode_g1(self.eval_commit)
            + encode_g1(self.quotient_commit)
        )

    @classmethod
    def from_bytes(cls, data):
        data = bytes(data)
        if len(data) != cls.ENCODED_SIZE:
            raise MalformedInput(
                f"witness 길이가 잘못되었습니다: {len(data)} != {cls.ENCODED_SIZE}"
            )
        point = decode_fr(data[:FR_BYTES])
        eval_commit = decode_g1(data[FR_BYTES:FR_BYTES + G1_BYTES])
        quotient_commit = decode_g1(data[FR_BYTES + G1_BYTES:])
        return cls(point, eval_commit, quotient_commit)


# ─────────────────────────────────────────────────────────────────────
# 입력 검사
# ─────────────────────────────────────────────────────────────────────

def _check_degree(degree, minimum):
    if isinstance(degree, bool) or not isinstance(degree, int):
        raise InvalidDegree(f"degree는 정수여야 합니다: {degree!r}")
    if degree < minimum:
        raise InvalidDegree(f"degree는 {minimum} 이상이어야 합니다: {degree}")


def _check_key(key, degree):
    if degree > key.G1_size():
        raise DegreeExceedsSRS(
            f"degree {degree}가 커밋먼트 키 크기 {key.G1_size()}를 초과합니다"
        )


def _read_poly(poly, degree):
    if len(poly) < degree:
        raise MalformedInput(
            f"다항식 계수가 {len(poly)}개뿐입니다 (degree {degree} 필요)"
        )
    return to_fr_list(poly[:degree])


# ─────────────────────────────────────────────────────────────────────
# 알고리즘
# ─────────────────────────────────────────────────────────────────────

def commit(key, poly, degree):
    """다항식을 커밋한다.

    C = Σ_{i=1}^{degree} poly[degree-i] · g1_powers[i-1]

    Args:
        key: CommitmentKey
        poly: 최고차 우선 계수 리스트 (길이 >= degree)
        degree: 읽을 계수의 개수

    Returns:
        G1 점 (영 다항식이면 None)

    Raises:
        InvalidDegree: degree < 1
        DegreeExceedsSRS: degree > key.G1_size()
        MalformedInput: 계수가 degree개보다 적을 때
    """
    _check_degree(degree, 1)
    _check_key(key, degree)
    coeffs = _read_poly(poly, degree)
    return msm(key.g1_powers, coeffs, 0, degree)


def evaluate(poly, point, degree):
    """다항식을 point에서 평가한다.

    eval = Σ_{i=1}^{degree} poly[degree-i] · point^(i-1)

    상수항부터 point의 거듭제곱을 누적하며 더한다. degree가 0이면
    빈 합이므로 0이다.
    """
    _check_degree(degree, 0)
    coeffs = _read_poly(poly, degree)
    if not isinstance(point, FR):
        point = FR(point)

    result = FR(0)
    power = FR(1)
    for i in range(1, degree + 1):
        result = result + coeffs[degree - i] * power
        power = power * point
    return result


def generate_witness(key, poly, point, degree):
    """p(point) = y 에 대한 열기 증명을 만든다.

    1. y = evaluate(p, z)
    2. p'(x) = p(x) - y  (상수항 p[degree-1]에서 y를 뺀다)
    3. ψ = p' / (x - z)  (합성 나눗셈, p'(z) = 0이므로 나머지 0)
    4. quotient_commit = Σ_{i=2}^{degree} ψ[degree-i] · g1_powers[i-2]
    5. eval_commit = y · g1_powers[0]

    Raises:
        InvalidDegree: degree < 2 (몫 다항식이 존재하지 않음)
        DegreeExceedsSRS: degree > key.G1_size()
        MalformedInput: 계수가 degree개보다 적을 때
        KZGError: 합성 나눗셈의 나머지가 0이 아닐 때
    """
    _check_degree(degree, 2)
    _check_key(key, degree)
    coeffs = _read_poly(poly, degree)
    if not isinstance(point, FR):
        point = FR(point)

    y = evaluate(coeffs, point, degree)

    shifted = list(coeffs)
    shifted[degree - 1] = shifted[degree - 1] - y

    psi, remainder = divide_by_linear(shifted, point)
    # 인수정리: p'(z) = 0 이면 (x - z) | p'(x)
    if remainder != FR(0):
        raise KZGError("열기 증명 생성 실패: 나머지가 0이 아닙니다")

    quotient_commit = msm(key.g1_powers, psi, 1, degree)
    eval_commit = ec_mul(key.g1_powers[0], y)

    return Witness(point, eval_commit, quotient_commit)


def verify_evaluation(key, commitment, witness):
    """페어링으로 열기 증명을 검증한다.

    e(C, g2) == e(W, a·g2 - z·g2) · e(y·g1, g2)

    Returns:
        bool: 검증 성공 여부. 위조되거나 다른 커밋먼트의 witness는
        예외 없이 False가 된다.

    Raises:
        MalformedInput: 키에 G2 원소가 2개 미만일 때
    """
    if key.G2_size() < 2:
        raise MalformedInput("검증에는 G2 원소 2개 (g2, a·g2)가 필요합니다")

    g2 = key.g2_powers[0]
    a_minus_z_g2 = ec_sub(key.g2_powers[1], ec_mul(g2, witness.point))  # (a - z)·g2

    lhs = ec_pairing(g2, commitment)
    rhs = (
        ec_pairing(a_minus_z_g2, witness.quotient_commit)
        * ec_pairing(g2, witness.eval_commit)
    )
    return lhs == rhs
