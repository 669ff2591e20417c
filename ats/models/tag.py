from ..extensions import db
from .base import TenantScopedMixin, TimestampMixin


class Tag(db.Model, TenantScopedMixin, TimestampMixin):
    __tablename__ = "tags"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), nullable=False)
    color = db.Column(db.String(20))

    __table_args__ = (
        db.UniqueConstraint('tenant_id', 'name', name='uq_tags_tenant_name'),
    )
