# FILE: tests/test_auth.py

import json
import uuid
from pathlib import Path

import pytest

from backend.services.access_guard import AccessGuard
from backend.services.auth import Authenticator, MS_PER_DAY, hash_password, verify_password
from backend.services.session_store import SessionStore

NOW = 1_700_000_000_000


@pytest.fixture
def session_store(record_store):
    return SessionStore(record_store, clock=lambda: NOW)


@pytest.fixture
def authenticator(record_store, session_store):
    return Authenticator(record_store, session_store, ttl_days=7, clock=lambda: NOW)


def test_correct_password_issues_token(authenticator, session_store, password):
    """Token round-trip through the session store"""
    token = authenticator.authenticate(password)
    
    assert token is not None
    assert uuid.UUID(token).version == 4
    assert session_store.all() == [{"token": token, "expires": NOW + 7 * MS_PER_DAY}]


def test_token_authorizes_only_itself(authenticator, session_store, password):
    token = authenticator.authenticate(password)
    guard = AccessGuard(session_store)
    
    assert guard.authorize({"Authorization": f"Bearer {token}"})
    assert not guard.authorize({"Authorization": f"Bearer {token}x"})
    assert not guard.authorize({"Authorization": "Bearer something-else"})


@pytest.mark.parametrize("candidate", ["wrong", "", None, "OPENSESAME", " opensesame", "opensesame "])
def test_wrong_password_creates_no_session(authenticator, session_store, record_store, password, candidate):
    """Denials leave the session store untouched"""
    before = session_store.all()
    
    assert authenticator.authenticate(candidate) is None
    assert session_store.all() == before
    assert not record_store.exists("sessions")


def test_each_login_gets_distinct_token(authenticator, session_store, password):
    tokens = {authenticator.authenticate(password) for _ in range(5)}
    
    assert len(tokens) == 5
    assert len(session_store.all()) == 5


def test_no_password_configured_denies_empty_candidate(authenticator, session_store):
    assert authenticator.authenticate("") is None
    assert session_store.all() == []


def test_fallback_password_from_settings(record_store, session_store):
    authenticator = Authenticator(
        record_store, session_store, fallback_password="from-env", clock=lambda: NOW
    )
    
    assert authenticator.authenticate("from-env") is not None
    assert authenticator.authenticate("other") is None


def test_stored_password_overrides_fallback(record_store, session_store, password):
    authenticator = Authenticator(
        record_store, session_store, fallback_password="from-env", clock=lambda: NOW
    )
    
    assert authenticator.authenticate("from-env") is None
    assert authenticator.authenticate(password) is not None


def test_hashed_password(record_store, authenticator):
    record_store.write("password", {"password_hash": hash_password("s3cret")})
    
    assert authenticator.authenticate("s3cret") is not None
    assert authenticator.authenticate("S3cret") is None


def test_numeric_password_compared_as_string(record_store, authenticator):
    record_store.write("password", {"password": "1234"})
    
    assert authenticator.authenticate(1234) is not None


def test_hash_format():
    hashed = hash_password("pw")
    
    assert hashed.startswith("$pbkdf2-sha256$")
    assert hash_password("pw") != hashed
    assert verify_password("pw", hashed)
    assert not verify_password("pw2", hashed)


@pytest.mark.parametrize("stored", ["", "garbage", "pw", "$pbkdf2-sha256$x$00$abc", "$md5$1$00$abc"])
def test_malformed_hash_never_verifies(stored):
    assert not verify_password("pw", stored)


def test_audit_trail_records_outcome_only(settings, authenticator, password):
    authenticator.authenticate("wrong", client="1.2.3.4")
    authenticator.authenticate(password, client="1.2.3.4")
    
    audit_files = list((Path(settings.logs_dir) / "auth").glob("*.jsonl"))
    assert len(audit_files) == 1
    
    content = audit_files[0].read_text()
    entries = [json.loads(line) for line in content.splitlines()]
    assert [e["event"] for e in entries] == ["auth_failure", "auth_success"]
    assert entries[0]["client"] == "1.2.3.4"
    assert password not in content
    assert "wrong" not in content


def test_set_password_tool_writes_hash(settings, authenticator, record_store):
    from tools.set_password import set_password
    
    assert set_password("new-secret", settings.data_dir)
    
    stored = record_store.read("password", {})
    assert "password" not in stored
    assert stored["password_hash"].startswith("$pbkdf2-sha256$")
    assert authenticator.authenticate("new-secret") is not None
