import uuid

import pytest

from ats.errors import AccessDenied, Forbidden, NotFound
from ats.tenancy.scope import (
    Authorized,
    Denied,
    Membership,
    Principal,
    SqlTenantDirectory,
    TenantRecord,
    check_tenant_access,
    is_stable_id,
    normalize_memberships,
    principal_from_user,
    resolve_tenant_scope,
)

ACME = str(uuid.uuid4())
GLOBEX = str(uuid.uuid4())
INITECH = str(uuid.uuid4())


class FakeDirectory:
    def __init__(self, *records):
        self.records = {r.id: r for r in records}
        self.calls = []

    def get_by_id(self, tenant_id):
        self.calls.append(("id", tenant_id))
        return self.records.get(tenant_id)

    def get_by_slug(self, slug):
        self.calls.append(("slug", slug))
        for r in self.records.values():
            if (r.slug or "").lower() == slug.lower():
                return r
        return None


DIRECTORY = FakeDirectory(
    TenantRecord(ACME, "Acme Corp", "acme"),
    TenantRecord(GLOBEX, "Globex", "globex"),
    TenantRecord(INITECH, None, "initech"),
)

MEMBER = Principal(user_id=1, email="a@acme.test", memberships=(
    Membership(ACME, "recruiter", "Acme Corp", "acme"),
    Membership(GLOBEX, "admin", "Globex", "globex", is_primary=True),
))
LONER = Principal(user_id=2, email="nobody@test")
SUPER = Principal(user_id=3, email="ops@test", is_super_admin=True)


@pytest.mark.parametrize("requested", [None, "", ACME, "acme", str(uuid.uuid4()), "nope"])
def test_no_memberships_is_access_denied(requested):
    with pytest.raises(AccessDenied):
        resolve_tenant_scope(LONER, requested, DIRECTORY)
    with pytest.raises(AccessDenied):
        resolve_tenant_scope(LONER, requested, DIRECTORY, strict=True)


def test_no_request_uses_primary_membership():
    ctx = resolve_tenant_scope(MEMBER, None, DIRECTORY)
    assert ctx.tenant_id == GLOBEX
    assert ctx.role == "admin"
    assert ctx.tenant_slug == "globex"
    assert ctx.is_super_admin is False


def test_no_primary_uses_first_membership():
    p = Principal(user_id=9, memberships=(Membership(ACME, "viewer", None, "acme"), Membership(GLOBEX)))
    ctx = resolve_tenant_scope(p, "  ", DIRECTORY)
    assert ctx.tenant_id == ACME
    # name falls back to the slug
    assert ctx.tenant_name == "acme"


def test_member_requesting_own_tenant_by_id_and_slug():
    by_id = resolve_tenant_scope(MEMBER, ACME, DIRECTORY)
    assert (by_id.tenant_id, by_id.role, by_id.tenant_name) == (ACME, "recruiter", "Acme Corp")
    by_slug = resolve_tenant_scope(MEMBER, "ACME", DIRECTORY)
    assert (by_slug.tenant_id, by_slug.role) == (ACME, "recruiter")


@pytest.mark.parametrize("requested", [INITECH, "initech", str(uuid.uuid4()), "does-not-exist"])
def test_non_member_falls_back_in_lenient_mode(requested):
    ctx = resolve_tenant_scope(MEMBER, requested, DIRECTORY)
    assert ctx.tenant_id == GLOBEX


@pytest.mark.parametrize("requested", [INITECH, "initech", str(uuid.uuid4()), "does-not-exist"])
def test_non_member_is_forbidden_in_strict_mode(requested):
    # existing and unknown tenants produce the same error for non members
    with pytest.raises(Forbidden):
        resolve_tenant_scope(MEMBER, requested, DIRECTORY, strict=True)


def test_non_member_slug_never_touches_directory():
    directory = FakeDirectory(TenantRecord(INITECH, "Initech", "initech"))
    check_tenant_access(MEMBER, "initech", directory)
    check_tenant_access(MEMBER, INITECH, directory)
    assert directory.calls == []


def test_super_admin_gets_any_existing_tenant_as_admin():
    ctx = resolve_tenant_scope(SUPER, INITECH, DIRECTORY, strict=True)
    assert ctx.tenant_id == INITECH
    assert ctx.role == "admin"
    assert ctx.is_super_admin is True
    assert ctx.tenant_name == "initech"

    by_slug = resolve_tenant_scope(SUPER, "Globex", DIRECTORY)
    assert (by_slug.tenant_id, by_slug.role) == (GLOBEX, "admin")


def test_super_admin_keeps_membership_role():
    p = Principal(user_id=4, is_super_admin=True, memberships=(Membership(ACME, "viewer", "Acme", "acme"),))
    assert resolve_tenant_scope(p, ACME, DIRECTORY).role == "viewer"
    assert resolve_tenant_scope(p, "acme", DIRECTORY).role == "viewer"
    assert resolve_tenant_scope(p, "globex", DIRECTORY).role == "admin"


@pytest.mark.parametrize("requested", [str(uuid.uuid4()), "ghost"])
def test_super_admin_unknown_tenant_is_not_found(requested):
    with pytest.raises(NotFound):
        resolve_tenant_scope(SUPER, requested, DIRECTORY)


def test_super_admin_without_request_or_memberships_is_denied():
    with pytest.raises(AccessDenied):
        resolve_tenant_scope(SUPER, None, DIRECTORY)


def test_member_of_deleted_tenant_is_not_found():
    p = Principal(user_id=5, memberships=(Membership(str(uuid.uuid4()), "owner"),))
    with pytest.raises(NotFound):
        resolve_tenant_scope(p, p.memberships[0].tenant_id, DIRECTORY)


def test_check_tenant_access_returns_explicit_variants():
    ok = check_tenant_access(MEMBER, "acme", DIRECTORY)
    assert isinstance(ok, Authorized)
    denied = check_tenant_access(MEMBER, INITECH, DIRECTORY)
    assert isinstance(denied, Denied)
    assert denied.reason is Forbidden
    assert denied.fallback.tenant_id == GLOBEX
    assert isinstance(denied.error(), Forbidden)


def test_stable_id_format():
    assert is_stable_id(ACME)
    assert is_stable_id(ACME.upper())
    assert not is_stable_id("acme")
    assert not is_stable_id("00000000-0000-0000-0000-000000000000")


def test_normalize_memberships_accepts_session_payloads():
    ms = normalize_memberships([
        {"tenantId": ACME, "tenantSlug": "acme", "role": "OWNER", "isPrimary": True},
        {"tenant_id": GLOBEX, "tenant_name": "Globex"},
        {"role": "admin"},
        "junk",
    ])
    assert [m.tenant_id for m in ms] == [ACME, GLOBEX]
    assert ms[0].role == "owner"
    assert ms[1].role == "viewer"


def test_principal_from_user_and_sql_directory(seed, db):
    alice = principal_from_user(seed.alice)
    assert alice.is_super_admin is False
    assert {m.tenant_slug for m in alice.memberships} == {"acme", "globex"}

    directory = SqlTenantDirectory(db.session)
    ctx = resolve_tenant_scope(alice, None, directory)
    assert ctx.tenant_id == seed.acme.id
    assert ctx.role == "admin"

    root = principal_from_user(seed.root)
    assert root.is_super_admin is True
    assert resolve_tenant_scope(root, "GLOBEX", directory).tenant_id == seed.globex.id

    envroot = principal_from_user(seed.envroot, ["Root@Platform.test"])
    assert envroot.is_super_admin is True


def test_inactive_user_has_no_access(seed, db):
    seed.alice.is_active = False
    db.session.commit()
    principal = principal_from_user(seed.alice)
    with pytest.raises(AccessDenied):
        resolve_tenant_scope(principal, None, SqlTenantDirectory(db.session))
