from ..extensions import db
from .base import TimestampMixin

ROLES = ("owner", "admin", "recruiter", "viewer")


class TenantMembership(db.Model, TimestampMixin):
    __tablename__ = "tenant_memberships"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    tenant_id = db.Column(db.String(36), db.ForeignKey("tenants.id"), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False, default="viewer")  # owner/admin/recruiter/viewer
    is_primary = db.Column(db.Boolean, nullable=False, default=False)

    user = db.relationship("User", back_populates="memberships")
    tenant = db.relationship("Tenant", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint('user_id', 'tenant_id', name='uq_membership_user_tenant'),
    )
