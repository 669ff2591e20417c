from ..extensions import db
from .scoring import tenant_scoring_config


def load_scoring_settings(tenant):
    config = tenant_scoring_config(tenant)
    return {
        "tenantId": tenant.id,
        "plan": config.plan,
        "hiringMode": config.mode,
        "overrides": tenant.scoring_config,
        "config": config.to_dict(),
    }


def update_scoring_settings(tenant, hiring_mode=None, overrides=None):
    """Store raw overrides / mode on the tenant and return the merged view.

    Values are stored as given; malformed pieces degrade to defaults when merged.
    """
    if hiring_mode:
        tenant.hiring_mode = hiring_mode
    if overrides is not None:
        tenant.scoring_config = overrides
    db.session.commit()
    return load_scoring_settings(tenant)
