"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import worklog_app` works.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fakes import DummyAPI, FakeSession  # noqa: E402

from worklog_app.core.models import Credentials  # noqa: E402


@pytest.fixture
def credentials():
    return Credentials(
        base_url="https://example.atlassian.net/",
        email="dev@example.com",
        access_token="secret-token",
    )


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def api(credentials, session):
    return DummyAPI(credentials, session)
