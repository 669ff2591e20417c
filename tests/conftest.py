import os
import sys
from types import SimpleNamespace

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from flask_login import FlaskLoginClient

from ats import create_app
from ats.extensions import db as _db
from ats.models import Application, Candidate, Job, Tenant, TenantMembership, User

FIVE_SKILLS = ["Python", "SQL", "Flask", "Docker", "AWS"]


@pytest.fixture
def app():
    app = create_app('config.TestConfig')
    app.test_client_class = FlaskLoginClient
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


def _tenant_rows(tenant, email):
    """Same job/candidate/application shape in every tenant."""
    job = Job(tenant_id=tenant.id, title="Backend Engineer", location="London",
              required_skills=list(FIVE_SKILLS), status="open")
    cand = Candidate(tenant_id=tenant.id, full_name="Sam Lee", email=email,
                     location="Greater London, UK", skills=["python", "Go", "sql"])
    _db.session.add_all([job, cand])
    _db.session.flush()
    application = Application(tenant_id=tenant.id, job_id=job.id, candidate_id=cand.id,
                              cv_url="s3://cv/sam.pdf", cover_letter="Hello",
                              location="London", linkedin_url="https://linkedin.com/in/sam")
    _db.session.add(application)
    _db.session.flush()
    return job, cand, application


@pytest.fixture
def seed(db):
    acme = Tenant(name="Acme Corp", slug="acme", plan="pro", hiring_mode="volume")
    globex = Tenant(name="Globex", slug="globex", plan="free")
    db.session.add_all([acme, globex])
    db.session.flush()

    alice = User(email="alice@acme.test")
    bob = User(email="bob@globex.test")
    vic = User(email="vic@acme.test")
    root = User(email="ops@platform.test", global_role="super_admin")
    envroot = User(email="root@platform.test")
    eve = User(email="eve@nowhere.test")
    db.session.add_all([alice, bob, vic, root, envroot, eve])
    db.session.flush()

    db.session.add_all([
        TenantMembership(user_id=alice.id, tenant_id=acme.id, role="admin", is_primary=True),
        TenantMembership(user_id=alice.id, tenant_id=globex.id, role="viewer"),
        TenantMembership(user_id=bob.id, tenant_id=globex.id, role="recruiter", is_primary=True),
        TenantMembership(user_id=vic.id, tenant_id=acme.id, role="viewer", is_primary=True),
    ])

    acme_job, acme_cand, acme_app = _tenant_rows(acme, "sam@example.com")
    globex_job, globex_cand, globex_app = _tenant_rows(globex, "sam@example.com")
    db.session.commit()

    return SimpleNamespace(
        acme=acme, globex=globex,
        alice=alice, bob=bob, vic=vic, root=root, envroot=envroot, eve=eve,
        acme_job=acme_job, acme_cand=acme_cand, acme_app=acme_app,
        globex_job=globex_job, globex_cand=globex_cand, globex_app=globex_app,
    )
