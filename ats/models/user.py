from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin

SUPER_ADMIN = "super_admin"


class User(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    global_role = db.Column(db.String(30), nullable=False, default="user")  # user/super_admin

    memberships = db.relationship("TenantMembership", back_populates="user", lazy="selectin")

    @property
    def is_super_admin(self):
        return self.global_role == SUPER_ADMIN
