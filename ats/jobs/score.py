from flask import current_app, has_app_context

from ..extensions import db, rq
from ..models.tenant import Tenant
from ..services.scoring import score_and_persist_application
from ..tenancy.store import TenantScopedStore


def _run_score_application(tenant_id: str, application_id: int, actor_id=None):
    tenant = db.session.get(Tenant, tenant_id)
    if tenant is None:
        current_app.logger.warning('Tenant %s vanished before scoring application %s', tenant_id, application_id)
        return None
    store = TenantScopedStore(db.session, tenant.id)
    result = score_and_persist_application(store, tenant, application_id, actor_id=actor_id)
    return result.to_dict() if result else None


def score_application(tenant_id: str, application_id: int, actor_id=None):
    """Entrypoint that ensures execution inside a Flask app context for workers."""
    if has_app_context():
        return _run_score_application(tenant_id, application_id, actor_id)
    from ats import create_app
    app = create_app()
    with app.app_context():
        return _run_score_application(tenant_id, application_id, actor_id)


def enqueue_application_scoring(tenant_id: str, application_id: int, actor_id=None):
    if not current_app.config.get('SCORING_ASYNC'):
        return score_application(tenant_id, application_id, actor_id)
    return rq.enqueue(score_application, tenant_id, application_id, actor_id, job_timeout=60)
