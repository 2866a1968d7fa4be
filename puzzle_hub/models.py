# puzzle_hub/models.py
from datetime import datetime, timezone
from .db import db


def _utcnow():
    return datetime.now(timezone.utc)


class YohakuResult(db.Model):
    """One finished (or abandoned) ten-puzzle Yohaku session."""
    __tablename__ = "yohaku_results"

    id              = db.Column(db.Integer, primary_key=True)
    session_id      = db.Column(db.String(64), unique=True, nullable=False)  # GameSession.id
    operation       = db.Column(db.String(20), nullable=False)               # 'addition'|'subtraction'|'multiplication'
    total_score     = db.Column(db.Integer, nullable=False, default=0)
    completed_count = db.Column(db.Integer, nullable=False, default=0)
    puzzle_count    = db.Column(db.Integer, nullable=False, default=10)
    started_at      = db.Column(db.DateTime(timezone=True), nullable=False)
    ended_at        = db.Column(db.DateTime(timezone=True), default=_utcnow)
    meta            = db.Column("metadata", db.JSON, nullable=False, default=dict)  # playflow summary

    def __repr__(self):
        return f"<YohakuResult id={self.id} session={self.session_id!r} score={self.total_score}>"
