from flask import Flask

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from config import config as default_config
from kzg_routes import kzg_bp, init_kzg_bp


def open_db(cfg):
    if cfg.in_memory:
        return TinyDB(storage=MemoryStorage)  # Memory DB
    return TinyDB(cfg.db_path)                # Storage DB


def create_app(cfg=None):
    cfg = cfg or default_config

    app = Flask(__name__)
    app.secret_key = cfg.secret_key
    app.config["KZG_MAX_DEGREE"] = cfg.max_degree

    db = open_db(cfg)
    init_kzg_bp(db.table("kzg"))
    app.register_blueprint(kzg_bp)

    app.logger.info("kzg: store=%s max_degree=%d", cfg.db_path, cfg.max_degree)
    return app



if __name__ == "__main__":
    create_app().run(
        host=default_config.host,
        port=default_config.port,
        debug=default_config.debug,
    )
