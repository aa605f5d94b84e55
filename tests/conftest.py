"""
Shared fixtures for the admin CLI test suite.
"""

import logging
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from openai_admin.api.admin_client import AdminClient
from openai_admin.core.config import Settings

logger = logging.getLogger(__name__)


ENVIRONMENT_VARIABLES = [
    "OPENAI_ADMIN_KEY",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_ORG_ID",
    "OPENAI_PROJECT_ID",
    "REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_PAGE_SIZE",
    "BUILD_VERSION",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's shell configuration out of every test."""
    for name in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a test admin key and no .env file."""
    return Settings(_env_file=None, openai_admin_key="sk-admin-test-key")


@pytest.fixture
def mock_client() -> MagicMock:
    """AdminClient double; set get/post/delete return values per test."""
    return MagicMock(spec=AdminClient)


def make_page_payload(
    records: List[Dict[str, Any]],
    has_more: bool,
    last_id: Optional[str] = None,
    first_id: Optional[str] = None
) -> Dict[str, Any]:
    """Build a list envelope the way the admin API returns it."""
    payload: Dict[str, Any] = {
        "object": "list",
        "data": records,
        "has_more": has_more,
    }
    if last_id is not None:
        payload["last_id"] = last_id
    if first_id is not None:
        payload["first_id"] = first_id
    return payload


@pytest.fixture
def page_payload():
    """Factory fixture for list envelopes."""
    return make_page_payload


@pytest.fixture
def sample_admin_key() -> Dict[str, Any]:
    """Admin key record with an owner."""
    return {
        "object": "organization.admin_api_key",
        "id": "key_abc",
        "name": "ci-bot",
        "redacted_value": "sk-admin-abc...xyz",
        "created_at": 1714564800,
        "last_used_at": None,
        "owner": {
            "type": "user",
            "object": "organization.user",
            "id": "user_123",
            "name": "Ada",
            "created_at": 1714521600,
            "role": "owner",
        },
    }
