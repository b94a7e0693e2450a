"""
정규(canonical) 바이트 인코딩
==============================

프로버와 검증자 프로세스 사이에서 CommitmentKey와 Witness를 옮기기 위한
고정 폭 인코딩이다. 모든 정수는 32바이트 빅엔디안이다.

    FR   : 32바이트, 값은 curve_order 미만
    G1   : x ‖ y                     (64바이트), 항등원은 0x00 * 64
    G2   : x.c0 ‖ x.c1 ‖ y.c0 ‖ y.c1 (128바이트), 항등원은 0x00 * 128

디코딩한 점은 곡선 위에 있어야 하며, 어긋나면 MalformedInput을 던진다.
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from kzg10.field import FR, CURVE_ORDER, FIELD_MODULUS, is_on_g1, is_on_g2
from kzg10.errors import MalformedInput


SCALAR_BYTES = 32
FR_BYTES = SCALAR_BYTES
G1_BYTES = 2 * SCALAR_BYTES
G2_BYTES = 4 * SCALAR_BYTES


def _int_to_bytes(value):
    return int(value).to_bytes(SCALAR_BYTES, "big")


def _read_ints(data, count, bound, what):
    if len(data) != count * SCALAR_BYTES:
        raise MalformedInput(
            f"{what} 인코딩 길이가 잘못되었습니다: {len(data)} != {count * SCALAR_BYTES}"
        )
    values = []
    for k in range(count):
        chunk = data[k * SCALAR_BYTES:(k + 1) * SCALAR_BYTES]
        v = int.from_bytes(chunk, "big")
        if v >= bound:
            raise MalformedInput(f"{what} 좌표가 범위를 벗어났습니다")
        values.append(v)
    return values


# ─── FR ───

def encode_fr(value):
    """FR → 32바이트"""
    if not isinstance(value, FR):
        value = FR(value)
    return _int_to_bytes(value)


def decode_fr(data):
    """32바이트 → FR"""
    (v,) = _read_ints(bytes(data), 1, CURVE_ORDER, "FR")
    return FR(v)


# ─── G1 ───

def encode_g1(point):
    """G1 점 → 64바이트"""
    if point is None:
        return b"\x00" * G1_BYTES
    x, y = point
    return _int_to_bytes(x) + _int_to_bytes(y)


def decode_g1(data):
    """64바이트 → G1 점"""
    x, y = _read_ints(bytes(data), 2, FIELD_MODULUS, "G1")
    if x == 0 and y == 0:
        return None
    point = (FQ(x), FQ(y))
    if not is_on_g1(point):
        raise MalformedInput("G1 점이 곡선 위에 있지 않습니다")
    return point


# ─── G2 ───

def encode_g2(point):
    """G2 점 → 128바이트"""
    if point is None:
        return b"\x00" * G2_BYTES
    x, y = point
    return b"".join(
        _int_to_bytes(c) for c in (x.coeffs[0], x.coeffs[1], y.coeffs[0], y.coeffs[1])
    )


def decode_g2(data):
    """128바이트 → G2 점"""
    x0, x1, y0, y1 = _read_ints(bytes(data), 4, FIELD_MODULUS, "G2")
    if x0 == x1 == y0 == y1 == 0:
        return None
    point = (bn128.FQ2([x0, x1]), bn128.FQ2([y0, y1]))
    if not is_on_g2(point):
        raise MalformedInput("G2 점이 곡선 또는 부분군 위에 있지 않습니다")
    return point
