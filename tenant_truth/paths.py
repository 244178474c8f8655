from __future__ import annotations

import os
from pathlib import Path

APP_ENV_POLICY = "TENANT_TRUTH_POLICY"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains tenant_truth/, config/, tests/.
    """
    return Path(__file__).parent.parent.resolve()


def config_dir() -> Path:
    return project_root() / "config"


def policy_path() -> Path:
    """
    Rent status policy file.

    Resolution order:
    1. TENANT_TRUTH_POLICY env var (explicit override)
    2. <project>/config/rent_status.yaml (default)
    """
    if os.environ.get(APP_ENV_POLICY):
        return Path(os.environ[APP_ENV_POLICY]).expanduser().resolve()
    return config_dir() / "rent_status.yaml"
