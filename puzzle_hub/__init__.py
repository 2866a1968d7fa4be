# puzzle_hub/__init__.py
from __future__ import annotations
import os
import logging
from logging.handlers import RotatingFileHandler
import click
from flask import Flask

from .db import db
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# --- extensions ---
migrate = Migrate()
# dev-friendly in-memory limiter; point RATELIMIT_STORAGE_URI at redis in prod
limiter = Limiter(get_remote_address)


def _configure_logging(app: Flask) -> None:
    level = logging.DEBUG if app.debug else logging.INFO
    app.logger.setLevel(level)
    for name in ("puzzle_hub", "puzzle_hub.games", "puzzle_hub.games.yohaku"):
        logging.getLogger(name).setLevel(level)

    if app.debug or app.testing:
        return

    # File handler - rotates logs when they get too big
    log_dir = app.config.get("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(os.path.join(log_dir, "puzzle_hub.log"),
                                       maxBytes=10240, backupCount=10)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))
    file_handler.setLevel(logging.INFO)
    logging.getLogger("puzzle_hub").addHandler(file_handler)
    app.logger.addHandler(file_handler)
    app.logger.info("Puzzle hub startup")


def create_app(config_object=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    app.config.from_object(config_object or "puzzle_hub.config.Config")
    app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)

    _configure_logging(app)

    # ---------------------------
    # Extensions init
    # ---------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .games.yohaku.routes import bp as yohaku_bp
    app.register_blueprint(yohaku_bp)

    from . import models  # noqa: F401  (register tables with the metadata)

    # ---------------------------
    # CLI commands
    # ---------------------------
    from .games.yohaku.cli import register_cli
    register_cli(app)

    @app.cli.command("yohaku-init-db")
    def yohaku_init_db():
        """Create the results table(s) without migrations."""
        with app.app_context():
            db.create_all()
        click.echo("✅ Created tables.")

    @app.after_request
    def set_security_headers(resp):
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return resp

    return app
