from .scope import (
    Authorized,
    Denied,
    Membership,
    Principal,
    SqlTenantDirectory,
    TenantContext,
    check_tenant_access,
    principal_from_user,
    resolve_tenant_scope,
)
from .store import (
    TENANT_OWNED_MODELS,
    AppendOnlyRepository,
    Repository,
    TenantRepository,
    TenantScopedStore,
)
