from ..extensions import db
from .base import TimestampMixin, new_uuid


class Tenant(db.Model, TimestampMixin):
    __tablename__ = "tenants"
    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    name = db.Column(db.String(120), nullable=False)
    slug = db.Column(db.String(80), nullable=False, unique=True, index=True)
    plan = db.Column(db.String(20), default="free")        # free/pro/enterprise
    hiring_mode = db.Column(db.String(20))                  # exec/volume/hybrid
    scoring_config = db.Column(db.JSON)                     # sparse overrides, may be malformed

    def __repr__(self) -> str:
        return f"<Tenant id={self.id} slug={self.slug!r}>"
