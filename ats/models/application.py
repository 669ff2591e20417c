from ..extensions import db
from .base import TenantScopedMixin, TimestampMixin


class Application(db.Model, TenantScopedMixin, TimestampMixin):
    __tablename__ = "applications"
    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id"), nullable=False, index=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)

    # submission fields consumed by scoring
    cv_url = db.Column(db.String(512))
    cover_letter = db.Column(db.Text)
    location = db.Column(db.String(200))
    linkedin_url = db.Column(db.String(512))
    source = db.Column(db.String(50))

    stage = db.Column(db.String(50), default="applied")
    status = db.Column(db.String(50), default="pending")
    match_score = db.Column(db.Integer)
    match_reason = db.Column(db.Text)

    job = db.relationship("Job")
    candidate = db.relationship("Candidate")
