"""
Centralized configuration for Tenant Truth.

Deployment-level values are read from environment variables.
Rent status policy is read from config/rent_status.yaml and falls back to
hardcoded defaults if the file is missing or unreadable.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml

from tenant_truth import paths

logger = logging.getLogger(__name__)

# ============================================================
# Logging
# ============================================================

LOG_LEVEL: str = os.environ.get("TENANT_TRUTH_LOG_LEVEL", "INFO")
"""Root log level for the CLI."""

_log_json_env = os.environ.get("TENANT_TRUTH_LOG_JSON")
LOG_JSON: bool | None = None if _log_json_env is None else _log_json_env.lower() in ("1", "true", "yes")
"""Force JSON logs on/off. Unset = JSON when stderr is not a TTY."""

# ============================================================
# Rent status policy
# ============================================================

_DEFAULT_ACTIVE_STATUSES = ("ACTIVE",)


class CreditPolicy(Enum):
    """What to do with a negative partial balance (tenant over-paid)."""

    SURFACE = "surface"
    CLAMP = "clamp"


@dataclass(frozen=True)
class RentPolicy:
    credit_policy: CreditPolicy = CreditPolicy.SURFACE
    active_statuses: tuple[str, ...] = _DEFAULT_ACTIVE_STATUSES
    enforce_invariants: bool = True


DEFAULT_POLICY = RentPolicy()


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        logger.info(f"Rent policy not found at {path}, using defaults")
        return {}
    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read rent policy {path}: {e}")
        return {}


def load_policy(path: Path | None = None) -> RentPolicy:
    """
    Load the rent status policy.

    Unknown or invalid values fall back to the defaults for that key only.
    """
    raw = _load_yaml(path or paths.policy_path())
    if not isinstance(raw, dict):
        logger.warning("Rent policy root is not a mapping, using defaults")
        return DEFAULT_POLICY

    credit = DEFAULT_POLICY.credit_policy
    if "credit_policy" in raw:
        try:
            credit = CreditPolicy(str(raw["credit_policy"]).lower())
        except ValueError:
            logger.warning(f"Unknown credit_policy {raw['credit_policy']!r}, using {credit.value}")

    active = raw.get("active_statuses", _DEFAULT_ACTIVE_STATUSES)
    if isinstance(active, str):
        active = [active]
    active_statuses = tuple(str(s).upper() for s in active) or _DEFAULT_ACTIVE_STATUSES

    return RentPolicy(
        credit_policy=credit,
        active_statuses=active_statuses,
        enforce_invariants=bool(raw.get("enforce_invariants", DEFAULT_POLICY.enforce_invariants)),
    )
