"""
KZG10 서비스 설정
==================

환경 변수로 덮어쓸 수 있는 기본값을 정의한다.
"""

import os

DEFAULT_DB_PATH = os.getenv("KZG_DB_PATH", "db.json")
DEFAULT_SECRET_KEY = os.getenv("KZG_SECRET_KEY", "key")

# /kzg/setup이 받아들이는 최대 차수 경계 (setup 비용이 t에 비례)
DEFAULT_MAX_DEGREE = int(os.getenv("KZG_MAX_DEGREE", 64))

DEFAULT_HOST = os.getenv("KZG_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("KZG_PORT", 5000))
DEFAULT_DEBUG = os.getenv("KZG_DEBUG", "0").lower() in ("1", "true", "yes")

# ":memory:" 이면 TinyDB MemoryStorage를 사용한다
MEMORY_DB = ":memory:"


class Config:
    """설정 클래스"""

    def __init__(self):
        self.db_path = DEFAULT_DB_PATH
        self.secret_key = DEFAULT_SECRET_KEY
        self.max_degree = DEFAULT_MAX_DEGREE
        self.host = DEFAULT_HOST
        self.port = DEFAULT_PORT
        self.debug = DEFAULT_DEBUG

    @property
    def in_memory(self):
        return self.db_path == MEMORY_DB


# 전역 설정 인스턴스
config = Config()
