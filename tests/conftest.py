# tests/conftest.py
import random

import pytest

from puzzle_hub import create_app
from puzzle_hub.db import db


@pytest.fixture
def app():
    app = create_app("puzzle_hub.config.TestingConfig")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def rng():
    return random.Random(20240611)
