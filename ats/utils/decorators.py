from functools import wraps
from flask import abort, current_app, g, request
from flask_login import current_user

from ..extensions import db
from ..tenancy.scope import SqlTenantDirectory, principal_from_user, resolve_tenant_scope
from ..tenancy.store import TenantScopedStore

ROLE_RANK = {"viewer": 0, "recruiter": 1, "admin": 2, "owner": 3}


def _super_admin_emails():
    raw = current_app.config.get("SUPER_ADMIN_EMAILS") or ""
    if isinstance(raw, str):
        return [e for e in raw.split(",") if e.strip()]
    return list(raw)


def _strict_requested():
    flag = request.args.get("strict")
    if flag is None:
        return bool(current_app.config.get("TENANT_STRICT_RESOLUTION"))
    return flag.strip().lower() in ("1", "true", "yes")


def tenant_required(view):
    """Resolve the tenant for ``current_user`` and bind a scoped store on ``g``.

    Scope errors propagate to the blueprint error handlers, so no view body runs
    without a resolved tenant.
    """
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        principal = principal_from_user(current_user, _super_admin_emails())
        requested = kwargs.get("tenant") or request.args.get("tenant")
        ctx = resolve_tenant_scope(
            principal,
            requested,
            SqlTenantDirectory(db.session),
            strict=_strict_requested(),
        )
        g.principal = principal
        g.tenant_ctx = ctx
        g.store = TenantScopedStore(db.session, ctx.tenant_id)
        return view(*args, **kwargs)
    return wrapped


def role_required(minimum):
    """Require at least ``minimum`` role in the resolved tenant (use under tenant_required)."""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            ctx = getattr(g, "tenant_ctx", None)
            if ctx is None:
                abort(403)
            if ROLE_RANK.get(ctx.role, -1) < ROLE_RANK[minimum]:
                abort(403)
            return view(*args, **kwargs)
        return wrapped
    return decorator
