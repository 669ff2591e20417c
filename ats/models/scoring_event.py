from ..extensions import db
from .base import TenantScopedMixin


class ScoringEvent(db.Model, TenantScopedMixin):
    """One scoring computation. Rows are appended, never updated."""
    __tablename__ = "scoring_events"

    id = db.Column(db.Integer, primary_key=True)
    # TenantScopedMixin: tenant_id
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id"), nullable=False, index=True)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id"), nullable=False)

    engine = db.Column(db.String(50), nullable=False)
    engine_version = db.Column(db.String(20))
    mode = db.Column(db.String(20))
    score = db.Column(db.Integer, nullable=False)
    tier = db.Column(db.String(1), nullable=False)
    reason = db.Column(db.Text)
    interview_focus = db.Column(db.JSON)

    # audit
    config_snapshot = db.Column(db.JSON)
    input_summary = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<ScoringEvent id={self.id} application_id={self.application_id} score={self.score}>"
