from ..extensions import db
from .base import TenantScopedMixin, TimestampMixin


class Note(db.Model, TenantScopedMixin, TimestampMixin):
    __tablename__ = "notes"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False)
    author_id = db.Column(db.Integer)  # user id
    body = db.Column(db.Text, nullable=False)
