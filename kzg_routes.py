"""
KZG10 Flask Blueprint — 프로버/검증자 엔드포인트
==================================================

커밋먼트 키는 TinyDB에 한 번 저장되고 이후 모든 요청이 읽기 전용으로
공유한다. 요청/응답은 JSON이며 큰 정수는 10진 문자열로 주고받는다.

POST /kzg/setup      커밋먼트 키 생성 및 저장
GET  /kzg/key        저장된 키 (?format=hex 이면 정규 인코딩)
POST /kzg/commit     다항식 커밋
POST /kzg/evaluate   다항식 평가
POST /kzg/challenge  세 커밋먼트로부터 평가 점 도출
POST /kzg/witness    열기 증명 생성
POST /kzg/verify     열기 증명 검증
POST /kzg/reset      저장소 초기화
"""

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from kzg10.errors import KZGError, MalformedInput
from kzg10.srs import setup
from kzg10.kzg import commit, evaluate, generate_witness, verify_evaluation
from kzg10.transcript import derive_challenge

from kzg_serializers import (
    serialize_fr, deserialize_fr,
    serialize_g1, deserialize_g1,
    deserialize_poly,
    serialize_key, deserialize_key, key_to_hex,
    serialize_witness, deserialize_witness, witness_to_hex, witness_from_hex,
    g1_short, fr_short,
)

kzg_bp = Blueprint('kzg', __name__, url_prefix='/kzg')

DATA = Query()

# DB는 app.py에서 주입
DB = None

# 디코딩한 커밋먼트 키 (/setup, /reset 때 교체된다)
KEY_CACHE = None

KEY_RECORD = "kzg.key"


def init_kzg_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB, KEY_CACHE
    DB = db
    KEY_CACHE = None


class MissingKey(Exception):
    """커밋먼트 키가 아직 생성되지 않았다."""


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def load_key():
    """저장된 키를 반환한다. 디코딩(부분군 검사 포함)은 한 번만 한다."""
    global KEY_CACHE
    if KEY_CACHE is None:
        data = db_get(KEY_RECORD)
        if data is None:
            raise MissingKey("커밋먼트 키가 없습니다. 먼저 /kzg/setup을 호출하세요")
        KEY_CACHE = deserialize_key(data)
    return KEY_CACHE


def store_key(key):
    global KEY_CACHE
    db_set(KEY_RECORD, serialize_key(key))
    KEY_CACHE = key


# ─── 요청 헬퍼 ───

def request_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise MalformedInput("JSON 객체 본문이 필요합니다")
    return body


def require(body, field):
    if field not in body:
        raise MalformedInput(f"필드가 없습니다: {field}")
    return body[field]


def poly_and_degree(body):
    poly = deserialize_poly(require(body, "poly"))
    degree = body.get("degree", len(poly))
    return poly, degree


# ─── 오류 처리 ───

@kzg_bp.errorhandler(KZGError)
def handle_kzg_error(exc):
    current_app.logger.warning("kzg: %s: %s", type(exc).__name__, exc)
    return jsonify({"error": type(exc).__name__, "message": str(exc)}), 400


@kzg_bp.errorhandler(MissingKey)
def handle_missing_key(exc):
    return jsonify({"error": "MissingKey", "message": str(exc)}), 409


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/setup", methods=["POST"])
def kzg_setup():
    """커밋먼트 키를 생성해서 저장한다."""
    body = request_body()
    t = require(body, "t")
    max_degree = current_app.config["KZG_MAX_DEGREE"]
    if isinstance(t, int) and t > max_degree:
        raise MalformedInput(f"t는 {max_degree} 이하여야 합니다: {t}")

    # 트랩도어는 항상 secrets로 뽑는다 (요청의 seed는 받지 않는다)
    key = setup(t)
    store_key(key)

    current_app.logger.info("kzg: setup t=%d (%d bits)", t, key.size_in_bits())
    return jsonify({
        "g1_size": key.G1_size(),
        "g2_size": key.G2_size(),
        "size_in_bits": key.size_in_bits(),
    })


@kzg_bp.route("/key", methods=["GET"])
def kzg_key():
    """저장된 커밋먼트 키를 반환한다."""
    key = load_key()
    if request.args.get("format") == "hex":
        return jsonify({"key": key_to_hex(key)})
    return jsonify({"key": serialize_key(key)})


# ──────────────────────────────────────────────────────────────
# Prover
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/commit", methods=["POST"])
def kzg_commit():
    body = request_body()
    poly, degree = poly_and_degree(body)
    key = load_key()

    commitment = commit(key, poly, degree)

    current_app.logger.info("kzg: commit degree=%s -> %s", degree, g1_short(commitment))
    return jsonify({"commitment": serialize_g1(commitment)})


@kzg_bp.route("/evaluate", methods=["POST"])
def kzg_evaluate():
    body = request_body()
    poly, degree = poly_and_degree(body)
    point = deserialize_fr(require(body, "point"))

    value = evaluate(poly, point, degree)
    return jsonify({"evaluation": serialize_fr(value)})


@kzg_bp.route("/challenge", methods=["POST"])
def kzg_challenge():
    """세 커밋먼트로부터 Fiat-Shamir 평가 점을 도출한다."""
    body = request_body()
    commitments = require(body, "commitments")
    if not isinstance(commitments, list) or len(commitments) != 3:
        raise MalformedInput("커밋먼트 3개가 필요합니다")
    a, b, c = (deserialize_g1(p) for p in commitments)

    point = derive_challenge(a, b, c)

    current_app.logger.info("kzg: challenge -> %s", fr_short(point))
    return jsonify({"point": serialize_fr(point)})


@kzg_bp.route("/witness", methods=["POST"])
def kzg_witness():
    body = request_body()
    poly, degree = poly_and_degree(body)
    point = deserialize_fr(require(body, "point"))
    key = load_key()

    witness = generate_witness(key, poly, point, degree)

    current_app.logger.info(
        "kzg: witness degree=%s point=%s", degree, fr_short(witness.point)
    )
    return jsonify({
        "witness": serialize_witness(witness),
        "hex": witness_to_hex(witness),
    })


# ──────────────────────────────────────────────────────────────
# Verifier
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/verify", methods=["POST"])
def kzg_verify():
    """열기 증명을 검증한다. witness는 dict 또는 hex 문자열."""
    body = request_body()
    commitment = deserialize_g1(require(body, "commitment"))
    witness_data = require(body, "witness")
    if isinstance(witness_data, str):
        witness = witness_from_hex(witness_data)
    else:
        witness = deserialize_witness(witness_data)
    key = load_key()

    result = verify_evaluation(key, commitment, witness)

    current_app.logger.info(
        "kzg: verify point=%s -> %s", fr_short(witness.point), result
    )
    return jsonify({"result": result})


@kzg_bp.route("/reset", methods=["POST"])
def kzg_reset():
    """저장소를 비운다."""
    global KEY_CACHE
    DB.truncate()
    KEY_CACHE = None
    current_app.logger.info("kzg: store cleared")
    return jsonify({"result": True})
