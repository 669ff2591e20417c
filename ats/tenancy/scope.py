"""Resolve which tenant a principal may act within for the current request.

The requested tenant (from a URL segment or query string) may be a stable id or a
slug. Non super admins only ever get a tenant they hold a membership for; a request
for anything else is denied, and the caller decides whether that denial falls back
to the principal's primary workspace or aborts.
"""
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import func

from ..errors import AccessDenied, Forbidden, NotFound

log = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

DEFAULT_ROLE = "viewer"
SUPER_ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Membership:
    tenant_id: str
    role: str = DEFAULT_ROLE
    tenant_name: Optional[str] = None
    tenant_slug: Optional[str] = None
    is_primary: bool = False


@dataclass(frozen=True)
class Principal:
    user_id: Optional[int]
    email: str = ""
    is_super_admin: bool = False
    memberships: Tuple[Membership, ...] = ()


@dataclass(frozen=True)
class TenantRecord:
    id: str
    name: Optional[str]
    slug: Optional[str]


@dataclass(frozen=True)
class TenantContext:
    tenant_id: str
    role: str
    tenant_name: str
    tenant_slug: Optional[str]
    is_super_admin: bool

    def to_dict(self):
        return {
            "tenantId": self.tenant_id,
            "role": self.role,
            "tenantName": self.tenant_name,
            "tenantSlug": self.tenant_slug,
            "isSuperAdmin": self.is_super_admin,
        }


@dataclass(frozen=True)
class Authorized:
    context: TenantContext


@dataclass(frozen=True)
class Denied:
    reason: type  # AccessDenied, Forbidden or NotFound
    requested: str = ""
    fallback: Optional[TenantContext] = None

    def error(self):
        return self.reason(requested=self.requested or None)


def is_stable_id(value):
    return bool(_UUID_RE.match(value or ""))


def _first(mapping, *keys):
    for k in keys:
        v = mapping.get(k)
        if v is not None:
            return v
    return None


def normalize_membership(raw):
    """Accept a Membership or a session-style mapping (camelCase or snake_case)."""
    if isinstance(raw, Membership):
        return raw
    if not isinstance(raw, Mapping):
        return None
    tenant_id = str(_first(raw, "tenantId", "tenant_id") or "").strip()
    if not tenant_id:
        return None
    return Membership(
        tenant_id=tenant_id,
        role=str(_first(raw, "role") or DEFAULT_ROLE).lower(),
        tenant_name=_first(raw, "tenantName", "tenant_name"),
        tenant_slug=_first(raw, "tenantSlug", "tenant_slug"),
        is_primary=bool(_first(raw, "isPrimary", "is_primary") or False),
    )


def normalize_memberships(raw):
    out = []
    for item in raw or ():
        m = normalize_membership(item)
        if m is not None and m.tenant_id:
            out.append(m)
    return tuple(out)


def principal_from_user(user, super_admin_emails=()):
    """Build a Principal from a ``User`` row and its memberships."""
    email = (user.email or "").strip().lower()
    supers = {e.strip().lower() for e in super_admin_emails if e and e.strip()}
    if not user.is_active:
        return Principal(user_id=user.id, email=email)
    memberships = []
    for m in user.memberships:
        tenant = m.tenant
        memberships.append(Membership(
            tenant_id=m.tenant_id,
            role=(m.role or DEFAULT_ROLE).lower(),
            tenant_name=tenant.name if tenant else None,
            tenant_slug=tenant.slug if tenant else None,
            is_primary=bool(m.is_primary),
        ))
    return Principal(
        user_id=user.id,
        email=email,
        is_super_admin=bool(user.is_super_admin or email in supers),
        memberships=normalize_memberships(memberships),
    )


def _display_name(name, slug):
    return name or slug or "Workspace"


def _from_membership(m, is_super_admin):
    return TenantContext(
        tenant_id=m.tenant_id,
        role=m.role,
        tenant_name=_display_name(m.tenant_name, m.tenant_slug),
        tenant_slug=m.tenant_slug or None,
        is_super_admin=is_super_admin,
    )


def _from_record(record, role, is_super_admin):
    return TenantContext(
        tenant_id=record.id,
        role=role,
        tenant_name=_display_name(record.name, record.slug),
        tenant_slug=record.slug,
        is_super_admin=is_super_admin,
    )


def primary_membership(memberships):
    for m in memberships:
        if m.is_primary:
            return m
    return memberships[0] if memberships else None


def check_tenant_access(principal, requested, directory):
    """Decide access for ``requested`` without applying any fallback policy.

    Returns ``Authorized(context)`` or ``Denied(reason, requested, fallback)`` where
    ``fallback`` is the primary-membership context a lenient caller may use instead.
    """
    requested = str(requested or "").strip()
    is_super = bool(principal.is_super_admin)
    memberships = normalize_memberships(principal.memberships)

    if not is_super and not memberships:
        return Denied(AccessDenied, requested)

    primary = primary_membership(memberships)
    fallback = _from_membership(primary, is_super) if primary else None

    if not requested:
        if fallback is None:
            return Denied(AccessDenied, requested)
        return Authorized(fallback)

    if is_stable_id(requested):
        match = next((m for m in memberships if m.tenant_id == requested), None)
        if match is None and not is_super:
            return Denied(Forbidden, requested, fallback)
        record = directory.get_by_id(requested)
        if record is None:
            return Denied(NotFound, requested)
        role = match.role if match else SUPER_ADMIN_ROLE
        return Authorized(_from_record(record, role, is_super))

    # slug; non members get the same answer whether or not the slug exists
    slug = requested.lower()
    match = next((m for m in memberships if (m.tenant_slug or "").lower() == slug), None)
    if match is not None:
        return Authorized(_from_membership(match, is_super))
    if not is_super:
        return Denied(Forbidden, requested, fallback)
    record = directory.get_by_slug(requested)
    if record is None:
        return Denied(NotFound, requested)
    return Authorized(_from_record(record, SUPER_ADMIN_ROLE, is_super))


def resolve_tenant_scope(principal, requested, directory, strict=False):
    """Return the TenantContext the principal acts within.

    Raises:
        AccessDenied: no memberships at all (and not a super admin).
        Forbidden: strict mode and the principal is not a member of ``requested``.
        NotFound: ``requested`` matches no tenant.
    """
    outcome = check_tenant_access(principal, requested, directory)
    if isinstance(outcome, Authorized):
        return outcome.context
    if outcome.fallback is not None and not strict:
        log.info("tenant %r not granted to user %s, using %s",
                 outcome.requested, principal.user_id, outcome.fallback.tenant_id)
        return outcome.fallback
    raise outcome.error()


class SqlTenantDirectory:
    """Tenant lookups against the ``tenants`` table."""

    def __init__(self, session):
        self.session = session

    @staticmethod
    def _record(tenant):
        if tenant is None:
            return None
        return TenantRecord(id=tenant.id, name=tenant.name, slug=tenant.slug)

    def get_by_id(self, tenant_id):
        from ..models.tenant import Tenant
        return self._record(self.session.get(Tenant, tenant_id))

    def get_by_slug(self, slug):
        from ..models.tenant import Tenant
        tenant = (
            self.session.query(Tenant)
            .filter(func.lower(Tenant.slug) == (slug or "").strip().lower())
            .first()
        )
        return self._record(tenant)
