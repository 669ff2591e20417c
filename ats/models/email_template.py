from ..extensions import db
from .base import TenantScopedMixin, TimestampMixin


class EmailTemplate(db.Model, TenantScopedMixin, TimestampMixin):
    __tablename__ = "email_templates"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    subject = db.Column(db.String(255))
    body = db.Column(db.Text)
