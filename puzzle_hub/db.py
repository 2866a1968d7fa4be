# puzzle_hub/db.py
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
