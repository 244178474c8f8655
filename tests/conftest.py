"""
Test configuration — ensures repo root is in sys.path and pins the policy.

This allows tests to import tenant_truth.* and tests.fixtures.* without an
install, and keeps a developer's TENANT_TRUTH_POLICY from leaking into runs.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tenant_truth.config import DEFAULT_POLICY  # noqa: E402
from tenant_truth.rent_status import BulkClassifier, StatusCalculator  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolate_policy_env(monkeypatch):
    """Never read a policy file from the developer's environment."""
    monkeypatch.delenv("TENANT_TRUTH_POLICY", raising=False)


@pytest.fixture
def as_of() -> date:
    """Mid-February 2024; January is the last fully elapsed month."""
    return date(2024, 2, 15)


@pytest.fixture
def calculator() -> StatusCalculator:
    return StatusCalculator(policy=DEFAULT_POLICY)


@pytest.fixture
def classifier(as_of) -> BulkClassifier:
    return BulkClassifier(as_of=as_of)


@pytest.fixture
def raw_tenants_path() -> Path:
    return FIXTURES_DIR / "raw_tenants.json"
