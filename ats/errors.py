"""Domain errors raised by the tenancy layer.

Scope errors abort the request before any data access happens. Isolation errors
come from the tenant-scoped store when a write would cross a tenant boundary.
"""


class TenantScopeError(Exception):
    code = "TENANT_SCOPE_ERROR"
    status_code = 403

    def __init__(self, message=None, requested=None):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.requested = requested


class AccessDenied(TenantScopeError):
    """Principal has no tenant memberships at all and is not a super admin."""
    code = "TENANT_ACCESS_DENIED"


class Forbidden(TenantScopeError):
    """Principal is not a member of the requested tenant (strict resolution)."""
    code = "TENANT_FORBIDDEN"


class NotFound(TenantScopeError):
    """Requested tenant id or slug matches no tenant."""
    code = "TENANT_NOT_FOUND"
    status_code = 404


class TenantIsolationError(Exception):
    code = "TENANT_ISOLATION"


class CrossTenantWrite(TenantIsolationError):
    code = "CROSS_TENANT_WRITE"

    def __init__(self, model, bound_tenant_id, given_tenant_id):
        super().__init__(
            f"{model}: write carries tenant_id={given_tenant_id!r} "
            f"but store is bound to {bound_tenant_id!r}"
        )
        self.model = model
        self.bound_tenant_id = bound_tenant_id
        self.given_tenant_id = given_tenant_id


class CrossTenantReference(TenantIsolationError):
    code = "CROSS_TENANT_REFERENCE"


class AppendOnlyViolation(TenantIsolationError):
    """Update or delete attempted on an append-only table (scoring events)."""
    code = "APPEND_ONLY"
