from ..extensions import db
from .base import TenantScopedMixin, TimestampMixin


class Candidate(db.Model, TenantScopedMixin, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    # TenantScopedMixin: tenant_id
    full_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(254), nullable=False)
    location = db.Column(db.String(200))
    current_title = db.Column(db.String(200))
    cv_url = db.Column(db.String(512))
    linkedin_url = db.Column(db.String(512))
    skills = db.Column(db.JSON)          # ["Python","Flask","SQL"]

    __table_args__ = (
        db.UniqueConstraint('tenant_id', 'email', name='uq_candidates_tenant_email'),
    )

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} email={self.email!r}>"
