from flask import g, jsonify, request
from flask_login import current_user
from werkzeug.exceptions import HTTPException

from . import bp
from ...errors import TenantIsolationError, TenantScopeError
from ...jobs.score import enqueue_application_scoring
from ...models.tenant import Tenant
from ...services.tenant_settings import load_scoring_settings, update_scoring_settings
from ...utils.decorators import role_required, tenant_required


def _error(status, code, message):
    return jsonify({"error": {"code": code, "message": message}}), status


@bp.errorhandler(TenantScopeError)
def handle_scope_error(exc):
    return _error(exc.status_code, exc.code, exc.message)


@bp.errorhandler(TenantIsolationError)
def handle_isolation_error(exc):
    return _error(409, exc.code, str(exc))


@bp.errorhandler(HTTPException)
def handle_http_error(exc):
    return _error(exc.code, exc.name.upper().replace(" ", "_"), exc.description)


@bp.get("/context")
@tenant_required
def tenant_context():
    return jsonify(g.tenant_ctx.to_dict())


@bp.get("/settings/scoring")
@tenant_required
def get_scoring_settings():
    tenant = g.store.unscoped(Tenant).get(g.tenant_ctx.tenant_id)
    return jsonify({"ok": True, **load_scoring_settings(tenant)})


@bp.post("/settings/scoring")
@tenant_required
@role_required("admin")
def post_scoring_settings():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _error(400, "INVALID_JSON", "Expected a JSON object")
    hiring_mode = payload.get("hiringMode")
    if hiring_mode is not None and not isinstance(hiring_mode, str):
        hiring_mode = None
    tenant = g.store.unscoped(Tenant).get(g.tenant_ctx.tenant_id)
    view = update_scoring_settings(tenant, hiring_mode=hiring_mode, overrides=payload.get("config"))
    return jsonify({"ok": True, **view})


@bp.post("/applications/<int:application_id>/score")
@tenant_required
@role_required("recruiter")
def score_application(application_id):
    if g.store.applications.count(id=application_id) == 0:
        return _error(404, "APPLICATION_NOT_FOUND", "Application not found")
    result = enqueue_application_scoring(g.tenant_ctx.tenant_id, application_id, actor_id=current_user.id)
    if isinstance(result, dict):
        return jsonify({"ok": True, **result})
    if result is None:
        return _error(404, "APPLICATION_NOT_SCORABLE", "Application could not be scored")
    # queued on RQ
    return jsonify({"ok": True, "queued": True, "jobId": getattr(result, "id", None)}), 202
