from ..extensions import db
from .base import TenantScopedMixin


class ActivityLog(db.Model, TenantScopedMixin):
    __tablename__ = "activity_logs"
    id = db.Column(db.Integer, primary_key=True)
    actor_id = db.Column(db.Integer)  # user id, None for background jobs
    action = db.Column(db.String(80), nullable=False)
    entity_type = db.Column(db.String(50))
    entity_id = db.Column(db.String(64))
    meta = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)
