from ..extensions import db
from .base import TenantScopedMixin, TimestampMixin


class Interview(db.Model, TenantScopedMixin, TimestampMixin):
    __tablename__ = "interviews"

    id = db.Column(db.Integer, primary_key=True)
    # TenantScopedMixin: tenant_id
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id"), nullable=False)
    scheduled_at = db.Column(db.DateTime)
    status = db.Column(db.String(20))      # scheduled/done/no_show/canceled
    result = db.Column(db.String(20))      # pass/fail/pending
    interviewer_id = db.Column(db.Integer)  # users.id

    def __repr__(self) -> str:
        return f"<Interview id={self.id} application_id={self.application_id}>"
