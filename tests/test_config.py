"""
Tests for rent policy loading and path resolution.
"""

import pytest

from tenant_truth import paths
from tenant_truth.config import DEFAULT_POLICY, CreditPolicy, RentPolicy, load_policy


def _write(tmp_path, text):
    path = tmp_path / "rent_status.yaml"
    path.write_text(text)
    return path


class TestLoadPolicy:
    def test_shipped_file_matches_defaults(self):
        assert load_policy() == DEFAULT_POLICY

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_policy(tmp_path / "absent.yaml") == DEFAULT_POLICY

    def test_clamp_policy(self, tmp_path):
        policy = load_policy(_write(tmp_path, "credit_policy: CLAMP\n"))
        assert policy.credit_policy is CreditPolicy.CLAMP
        assert policy.active_statuses == ("ACTIVE",)

    def test_unknown_credit_policy_falls_back(self, tmp_path):
        policy = load_policy(_write(tmp_path, "credit_policy: forgive\nenforce_invariants: false\n"))
        assert policy.credit_policy is CreditPolicy.SURFACE
        assert policy.enforce_invariants is False

    def test_single_active_status_string(self, tmp_path):
        policy = load_policy(_write(tmp_path, "active_statuses: notice_period\n"))
        assert policy.active_statuses == ("NOTICE_PERIOD",)

    def test_active_status_list_uppercased(self, tmp_path):
        policy = load_policy(_write(tmp_path, "active_statuses: [active, notice_period]\n"))
        assert policy.active_statuses == ("ACTIVE", "NOTICE_PERIOD")

    def test_empty_active_statuses_use_default(self, tmp_path):
        policy = load_policy(_write(tmp_path, "active_statuses: []\n"))
        assert policy.active_statuses == ("ACTIVE",)

    def test_invalid_yaml_uses_defaults(self, tmp_path):
        assert load_policy(_write(tmp_path, "credit_policy: [unclosed\n")) == DEFAULT_POLICY

    def test_non_mapping_root_uses_defaults(self, tmp_path):
        assert load_policy(_write(tmp_path, "- surface\n- clamp\n")) == DEFAULT_POLICY

    def test_empty_file_uses_defaults(self, tmp_path):
        assert load_policy(_write(tmp_path, "")) == DEFAULT_POLICY

    def test_env_override(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "credit_policy: clamp\n")
        monkeypatch.setenv(paths.APP_ENV_POLICY, str(path))

        assert paths.policy_path() == path.resolve()
        assert load_policy().credit_policy is CreditPolicy.CLAMP


class TestPaths:
    def test_default_policy_path(self):
        assert paths.policy_path() == paths.project_root() / "config" / "rent_status.yaml"
        assert paths.policy_path().exists()

    def test_policy_is_immutable(self):
        with pytest.raises(AttributeError):
            RentPolicy().credit_policy = CreditPolicy.CLAMP
