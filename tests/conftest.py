"""Shared pytest fixtures."""

import os

# Must be set before scopelock.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("PUBLIC_BASE_URL", "https://scopelock.test")
os.environ.setdefault("ADMIN_USERNAME", "operator")
os.environ.setdefault("ADMIN_PASSWORD", "admin-pass")

import pytest
from datetime import datetime
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from scopelock.database import Base, get_db, init_db
from scopelock.models.proposal import Proposal, STATUS_DRAFT
from scopelock.models.user import User
from scopelock.services.auth import create_access_token, hash_password
from scopelock.services.lifecycle import new_signing_token
from scopelock.services.llm import get_llm

SAMPLE_PROPOSAL_TEXT = """---
PROJECT PROPOSAL
Prepared by: Ada Freelancer
Prepared for: Acme Corp
---

EXECUTIVE SUMMARY
A fast, modern marketing site."""


class FakeLLM:
    """Stands in for LLMClient and records every prompt it is sent."""

    def __init__(self, reply=SAMPLE_PROPOSAL_TEXT):
        self.reply = reply
        self.calls = []

    def complete(self, prompt, max_tokens=2048, temperature=0.7):
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "temperature": temperature})
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
async def client(session_factory, fake_llm):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm] = lambda: fake_llm

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_user(session, email="ada@example.com", plan="free", full_name="Ada Freelancer", password="secret123"):
    user = User(
        email=email,
        hashed_password=hash_password(password),
        full_name=full_name,
        plan=plan,
        is_active=True,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_proposal(session, user, created_at=None, status=STATUS_DRAFT, **overrides):
    fields = dict(
        user_id=user.id,
        signing_token=new_signing_token(),
        client_name="Acme Corp",
        client_email="owner@acme.test",
        title="Marketing site",
        project_type="Web Design",
        deliverables="5 page website",
        timeline="4 weeks",
        payment_terms="50% upfront",
        price=2000.0,
        revision_limit=2,
        revisions_used=0,
        proposal_content=SAMPLE_PROPOSAL_TEXT,
        status=status,
    )
    fields.update(overrides)
    if created_at is not None:
        fields["created_at"] = created_at
    proposal = Proposal(**fields)
    session.add(proposal)
    session.commit()
    session.refresh(proposal)
    return proposal


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


@pytest.fixture
def user(db_session):
    return make_user(db_session)


@pytest.fixture
def auth_headers(user):
    return bearer(user)


@pytest.fixture
def proposal(db_session, user):
    return make_proposal(db_session, user)


@pytest.fixture
def valid_form():
    return {
        "clientName": "Acme Corp",
        "clientEmail": "owner@acme.test",
        "title": "Marketing site",
        "projectType": "Web Design",
        "deliverables": "5 page website, logo",
        "timeline": "4 weeks",
        "price": "$2,000",
        "revisionLimit": "3",
        "paymentTerms": "50% upfront, 50% on delivery",
    }


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def user_factory(db_session):
    def factory(**kwargs):
        return make_user(db_session, **kwargs)
    return factory


@pytest.fixture
def proposal_factory(db_session):
    def factory(owner, **kwargs):
        return make_proposal(db_session, owner, **kwargs)
    return factory


@pytest.fixture
def headers_for():
    return bearer
