"""Tenant-scoped data access over the SQLAlchemy session.

A ``TenantScopedStore`` is built once per resolved tenant and exposes one repository
per tenant-owned model. Every read, bulk update and bulk delete on those
repositories has ``tenant_id`` conjoined into its filter, and every create has
``tenant_id`` stamped into the row, so feature code never has to remember to do it.

Global models (tenants, users, memberships) are reached through ``unscoped()``
and are never filtered.
"""
import logging

from ..errors import AppendOnlyViolation, CrossTenantReference, CrossTenantWrite
from ..models import (
    ActivityLog,
    Application,
    Candidate,
    EmailTemplate,
    Interview,
    Job,
    Note,
    ScoringEvent,
    Tag,
)

log = logging.getLogger(__name__)

TENANT_FIELD = "tenant_id"

# attribute name on the store -> model; anything not listed here is global
TENANT_OWNED_MODELS = {
    "jobs": Job,
    "candidates": Candidate,
    "applications": Application,
    "interviews": Interview,
    "notes": Note,
    "tags": Tag,
    "email_templates": EmailTemplate,
    "activity_logs": ActivityLog,
    "scoring_events": ScoringEvent,
}


class Repository:
    """Plain data access for one model. Subclasses narrow it to a tenant."""

    def __init__(self, session, model):
        self.session = session
        self.model = model

    def _scope(self, query, filters):
        return query

    def _prepare(self, data):
        return dict(data)

    def _query(self, criteria, filters):
        q = self._scope(self.session.query(self.model), filters)
        if filters:
            q = q.filter_by(**filters)
        if criteria:
            q = q.filter(*criteria)
        return q

    def find_many(self, *criteria, order_by=None, limit=None, offset=None, **filters):
        q = self._query(criteria, filters)
        if order_by is not None:
            q = q.order_by(*(order_by if isinstance(order_by, (list, tuple)) else (order_by,)))
        if offset:
            q = q.offset(offset)
        if limit:
            q = q.limit(limit)
        return q.all()

    def find_first(self, *criteria, order_by=None, **filters):
        q = self._query(criteria, filters)
        if order_by is not None:
            q = q.order_by(*(order_by if isinstance(order_by, (list, tuple)) else (order_by,)))
        return q.first()

    def count(self, *criteria, **filters):
        return self._query(criteria, filters).count()

    def get_raw(self, pk):
        """Primary key lookup with no tenant condition.

        Not tenant safe: the key alone decides. Use ``get`` (or ``find_first``) on
        tenant-owned models unless crossing tenants is the point.
        """
        return self.session.get(self.model, pk)

    def get(self, pk):
        return self.get_raw(pk)

    def create(self, data=None, **fields):
        values = self._prepare({**(data or {}), **fields})
        obj = self.model(**values)
        self.session.add(obj)
        self.session.flush()
        return obj

    def create_many(self, rows):
        objs = [self.model(**self._prepare(row)) for row in rows]
        self.session.add_all(objs)
        self.session.flush()
        return objs

    def update_many(self, values, *criteria, **filters):
        return self._query(criteria, filters).update(dict(values), synchronize_session="fetch")

    def delete_many(self, *criteria, **filters):
        return self._query(criteria, filters).delete(synchronize_session="fetch")


class TenantRepository(Repository):
    """Repository bound to one tenant id."""

    def __init__(self, session, model, tenant_id, allow_cross_tenant_writes=False):
        super().__init__(session, model)
        self.tenant_id = tenant_id
        self.allow_cross_tenant_writes = allow_cross_tenant_writes

    def _scope(self, query, filters):
        # an explicit tenant filter from the caller is trusted as-is
        if TENANT_FIELD in filters:
            return query
        return query.filter(getattr(self.model, TENANT_FIELD) == self.tenant_id)

    def _check_tenant_value(self, value):
        if value is None or value == self.tenant_id:
            return
        if not self.allow_cross_tenant_writes:
            raise CrossTenantWrite(self.model.__name__, self.tenant_id, value)
        log.warning("cross-tenant write on %s: bound=%s given=%s",
                    self.model.__name__, self.tenant_id, value)

    def _prepare(self, data):
        values = dict(data)
        given = values.get(TENANT_FIELD)
        self._check_tenant_value(given)
        if given is None:
            values[TENANT_FIELD] = self.tenant_id
        return values

    def get(self, pk):
        """Tenant-safe primary key lookup (``find_first`` on id + tenant)."""
        return self.find_first(id=pk)

    def update_many(self, values, *criteria, **filters):
        if TENANT_FIELD in values:
            self._check_tenant_value(values[TENANT_FIELD])
        return super().update_many(values, *criteria, **filters)


class ApplicationRepository(TenantRepository):
    """Applications must point at a job and a candidate of their own tenant."""

    def _ensure_owned(self, model, pk, tenant_id):
        if pk is None:
            return
        found = (
            self.session.query(model.id)
            .filter(model.id == pk, getattr(model, TENANT_FIELD) == tenant_id)
            .first()
        )
        if found is None:
            raise CrossTenantReference(
                f"{model.__name__} {pk} does not belong to tenant {tenant_id}"
            )

    def _prepare(self, data):
        values = super()._prepare(data)
        self._ensure_owned(Job, values.get("job_id"), values[TENANT_FIELD])
        self._ensure_owned(Candidate, values.get("candidate_id"), values[TENANT_FIELD])
        return values

    def update_many(self, values, *criteria, **filters):
        tenant_id = values.get(TENANT_FIELD) or self.tenant_id
        self._ensure_owned(Job, values.get("job_id"), tenant_id)
        self._ensure_owned(Candidate, values.get("candidate_id"), tenant_id)
        return super().update_many(values, *criteria, **filters)


class AppendOnlyMixin:
    """Scoring events are written once and never changed or removed."""

    def update_many(self, values, *criteria, **filters):
        raise AppendOnlyViolation(f"{self.model.__tablename__} rows cannot be updated")

    def delete_many(self, *criteria, **filters):
        raise AppendOnlyViolation(f"{self.model.__tablename__} rows cannot be deleted")


class AppendOnlyRepository(AppendOnlyMixin, TenantRepository):
    pass


class UnscopedAppendOnlyRepository(AppendOnlyMixin, Repository):
    pass


# models needing more than the plain tenant repository
_REPOSITORY_CLASSES = {
    Application: ApplicationRepository,
    ScoringEvent: AppendOnlyRepository,
}


class TenantScopedStore:
    """Data access facade bound to one tenant.

    Usage::

        store = TenantScopedStore(db.session, ctx.tenant_id)
        jobs = store.jobs.find_many(status="open")
        store.notes.create(candidate_id=c.id, body="call back")
    """

    def __init__(self, session, tenant_id, allow_cross_tenant_writes=False):
        if not tenant_id:
            raise ValueError("TenantScopedStore needs a resolved tenant id")
        self.session = session
        self.tenant_id = tenant_id
        self.allow_cross_tenant_writes = allow_cross_tenant_writes
        self._repos = {}
        for name, model in TENANT_OWNED_MODELS.items():
            repo_cls = _REPOSITORY_CLASSES.get(model, TenantRepository)
            repo = repo_cls(session, model, tenant_id, allow_cross_tenant_writes)
            self._repos[model] = repo
            setattr(self, name, repo)

    def repository(self, model):
        """Scoped repository for tenant-owned models, plain one for global models."""
        repo = self._repos.get(model)
        if repo is not None:
            return repo
        return self.unscoped(model)

    def unscoped(self, model):
        if model in self._repos:
            log.warning("unscoped access to tenant-owned model %s", model.__name__)
        if model is ScoringEvent:
            return UnscopedAppendOnlyRepository(self.session, model)
        return Repository(self.session, model)

    def flush(self):
        self.session.flush()

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()
