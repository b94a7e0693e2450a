"""
KZG10 데이터 직렬화/역직렬화 헬퍼
====================================

TinyDB와 JSON 요청/응답에 담을 수 있는 형태로 KZG10 객체를 변환한다.
정수는 10진 문자열로 저장한다 (JSON 숫자는 254비트 값을 담지 못한다).
프로세스 간 전송용 정규 바이트 인코딩은 hex 헬퍼로 감싼다.
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from kzg10.field import FR, CURVE_ORDER, FIELD_MODULUS, is_on_g1, is_on_g2
from kzg10.errors import MalformedInput
from kzg10.srs import CommitmentKey
from kzg10.kzg import Witness


def _to_int(s):
    """int 또는 10진 문자열만 받는다 (float, bool은 거부)."""
    if isinstance(s, int) and not isinstance(s, bool):
        return s
    if isinstance(s, str) and s.isdecimal():
        return int(s)
    raise MalformedInput(f"정수로 해석할 수 없습니다: {s!r}")


def _to_coord(s):
    v = _to_int(s)
    if not 0 <= v < FIELD_MODULUS:
        raise MalformedInput(f"좌표가 범위를 벗어났습니다: {s!r}")
    return v


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR (값은 curve_order 미만)"""
    v = _to_int(s)
    if not 0 <= v < CURVE_ORDER:
        raise MalformedInput(f"FR 값이 범위를 벗어났습니다: {s!r}")
    return FR(v)


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → G1 point"""
    if data is None:
        return None
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise MalformedInput(f"G1 점 형식이 잘못되었습니다: {data!r}")
    point = (FQ(_to_coord(data[0])), FQ(_to_coord(data[1])))
    if not is_on_g1(point):
        raise MalformedInput("G1 점이 곡선 위에 있지 않습니다")
    return point


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    if point is None:
        return None
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))]
    ]


def deserialize_g2(data):
    """[[str,str],[str,str]] or None → G2 point"""
    if data is None:
        return None
    try:
        (x0, x1), (y0, y1) = data
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"G2 점 형식이 잘못되었습니다: {data!r}") from exc
    point = (
        bn128.FQ2([_to_coord(x0), _to_coord(x1)]),
        bn128.FQ2([_to_coord(y0), _to_coord(y1)])
    )
    if not is_on_g2(point):
        raise MalformedInput("G2 점이 곡선 또는 부분군 위에 있지 않습니다")
    return point


# ─── Polynomial (최고차 우선 계수 리스트) ───

def serialize_poly(poly):
    """list[FR] → list of str"""
    return [str(int(c)) for c in poly]


def deserialize_poly(data):
    """list of str/int → list[FR]"""
    if not isinstance(data, list):
        raise MalformedInput(f"다항식은 계수 리스트여야 합니다: {data!r}")
    return [deserialize_fr(s) for s in data]


# ─── CommitmentKey ───

def serialize_key(key):
    """CommitmentKey → dict"""
    return {
        "g1_powers": [serialize_g1(p) for p in key.g1_powers],
        "g2_powers": [serialize_g2(p) for p in key.g2_powers],
    }


def deserialize_key(data):
    """dict → CommitmentKey"""
    try:
        g1_data = data["g1_powers"]
        g2_data = data["g2_powers"]
    except (KeyError, TypeError) as exc:
        raise MalformedInput(f"커밋먼트 키 필드가 없습니다: {exc}") from exc
    g1_powers = [deserialize_g1(p) for p in g1_data]
    g2_powers = [deserialize_g2(p) for p in g2_data]
    return CommitmentKey(g1_powers, g2_powers)


def key_to_hex(key):
    """CommitmentKey → 정규 인코딩 hex 문자열"""
    return key.to_bytes().hex()


def key_from_hex(hex_str):
    """hex 문자열 → CommitmentKey"""
    try:
        raw = bytes.fromhex(hex_str)
    except (TypeError, ValueError) as exc:
        raise MalformedInput("커밋먼트 키 hex 문자열이 잘못되었습니다") from exc
    return CommitmentKey.from_bytes(raw)


# ─── Witness ───

def serialize_witness(witness):
    """Witness → dict"""
    return {
        "point": serialize_fr(witness.point),
        "eval_commit": serialize_g1(witness.eval_commit),
        "quotient_commit": serialize_g1(witness.quotient_commit),
    }


def deserialize_witness(data):
    """dict → Witness"""
    try:
        return Witness(
            deserialize_fr(data["point"]),
            deserialize_g1(data["eval_commit"]),
            deserialize_g1(data["quotient_commit"]),
        )
    except (KeyError, TypeError) as exc:
        raise MalformedInput(f"witness 필드가 없습니다: {exc}") from exc


def witness_to_hex(witness):
    """Witness → 정규 인코딩 hex 문자열"""
    return witness.to_bytes().hex()


def witness_from_hex(hex_str):
    """hex 문자열 → Witness"""
    try:
        raw = bytes.fromhex(hex_str)
    except (TypeError, ValueError) as exc:
        raise MalformedInput("witness hex 문자열이 잘못되었습니다") from exc
    return Witness.from_bytes(raw)


# ─── 표시 헬퍼 ───

def _shorten(s):
    if len(s) <= 8:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열 (로그 표시용)"""
    if point is None:
        return "∞"
    return f"({_shorten(str(int(point[0])))}, {_shorten(str(int(point[1])))})"


def fr_short(val):
    """FR → 축약 문자열 (로그 표시용)"""
    if val is None:
        return "None"
    s = str(int(val))
    if len(s) <= 10:
        return s
    return s[:4] + "..." + s[-4:]
