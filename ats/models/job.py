from ..extensions import db
from .base import TenantScopedMixin, TimestampMixin


class Job(db.Model, TenantScopedMixin, TimestampMixin):
    __tablename__ = "jobs"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(200))
    required_skills = db.Column(db.JSON)           # ["Python","SQL"]
    hiring_mode = db.Column(db.String(20))         # executive/volume/balanced hint
    scoring_overrides = db.Column(db.JSON)         # same shape as Tenant.scoring_config
    status = db.Column(db.String(20), default="open")
    visibility = db.Column(db.String(20), default="public")

    def __repr__(self) -> str:
        return f"<Job id={self.id} title={self.title!r}>"
