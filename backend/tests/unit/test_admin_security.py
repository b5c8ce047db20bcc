"""
Unit tests for the admin credential check, tokens and the admin dependency.
"""

import subprocess
import sys
from pathlib import Path

import pytest
from fastapi import HTTPException, status

from api.dependencies import get_current_token
from api.deps_admin import get_current_admin
from core.security import ADMIN_ROLE, TokenService, verify_admin_credentials

SECRET = "unit-test-secret-with-enough-length-123"
BACKEND_DIR = Path(__file__).resolve().parents[2]


def test_credentials_match():
    assert verify_admin_credentials("admin@grindstories.com", "pw", "admin@grindstories.com", "pw")


def test_email_compare_ignores_case_and_spaces():
    assert verify_admin_credentials(" Admin@GrindStories.com", "pw", "admin@grindstories.com", "pw")


@pytest.mark.parametrize(
    "email, password",
    [
        ("admin@grindstories.com", "wrong"),
        ("other@grindstories.com", "pw"),
        ("", ""),
    ],
)
def test_credentials_mismatch(email, password):
    assert not verify_admin_credentials(email, password, "admin@grindstories.com", "pw")


def test_token_round_trip():
    service = TokenService(secret_key=SECRET)
    payload = service.verify_access_token(service.create_access_token("admin@grindstories.com"))

    assert payload.sub == "admin@grindstories.com"
    assert payload.role == ADMIN_ROLE
    assert payload.is_admin


def test_token_signed_with_other_key_is_rejected():
    token = TokenService(secret_key="another-secret-of-sufficient-length").create_access_token("x")
    assert TokenService(secret_key=SECRET).verify_access_token(token) is None


def test_expired_token_is_rejected():
    service = TokenService(secret_key=SECRET, access_token_expire_minutes=-1)
    assert service.verify_access_token(service.create_access_token("x")) is None


@pytest.mark.asyncio
async def test_missing_bearer_header_is_401():
    with pytest.raises(HTTPException) as exc_info:
        await get_current_token(authorization=None)
    assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_non_admin_token_is_403():
    payload = TokenService(secret_key=SECRET).decode_token(
        TokenService(secret_key=SECRET).create_access_token("reader", role="reader")
    )
    with pytest.raises(HTTPException) as exc_info:
        await get_current_admin(payload)
    assert exc_info.value.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_admin_token_passes():
    service = TokenService(secret_key=SECRET)
    payload = service.decode_token(service.create_access_token("admin@grindstories.com"))
    assert await get_current_admin(payload) is payload


@pytest.mark.parametrize("module", ["api.deps_admin", "api.dependencies", "api.routes.auth"])
def test_auth_modules_import_in_a_fresh_interpreter(module):
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=BACKEND_DIR,
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
