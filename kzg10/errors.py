"""
KZG10 예외 계층
================

모든 예외는 ValueError의 하위 클래스이다. 호출자의 오용이나 손상된
데이터를 나타내므로 내부에서 재시도하지 않고 즉시 호출자에게 전달한다.

검증 실패는 예외가 아니다: verify_evaluation은 위조된 증명에 대해
False를 반환한다.
"""


class KZGError(ValueError):
    """KZG10 연산의 잘못된 입력."""


class InvalidDegree(KZGError):
    """차수 경계가 0이거나 연산에 비해 너무 작다 (예: witness는 degree >= 2)."""


class DegreeExceedsSRS(KZGError):
    """요청한 차수가 CommitmentKey가 지원하는 크기를 넘는다."""


class MalformedInput(KZGError):
    """형태가 잘못된 다항식, 키, witness 또는 직렬화 데이터."""
