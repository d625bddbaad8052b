"""
STG Configuration — Build Profile & Paths

Three build profiles:
  PRODUCTION  — default; audit log is sealed (no clear)
  DEVELOPMENT — local runs; audit log still sealed
  TEST        — test suites only; unlocks AuditLog.clear()

All values are read from the environment at call time.
Unknown profiles fall back to PRODUCTION (fail-closed).
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger("alive.stg.config")

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_EXECUTION_LOG_PATH = PROJECT_ROOT / "runtime" / "execution.log"
DEFAULT_AUDIT_EXPORT_PATH = PROJECT_ROOT / "reports" / "stg_audit.jsonl"


# =============================================================================
# PROFILE ENUM
# =============================================================================

class BuildProfile(Enum):
    PRODUCTION = "PRODUCTION"
    DEVELOPMENT = "DEVELOPMENT"
    TEST = "TEST"


@dataclass(frozen=True)
class STGConfig:
    profile: BuildProfile
    execution_log_path: Path
    audit_export_path: Path


# =============================================================================
# RESOLUTION
# =============================================================================

def get_build_profile() -> BuildProfile:
    """Get the build profile from environment."""
    raw = os.environ.get("ALIVE_BUILD_PROFILE", "PRODUCTION").strip().upper()
    try:
        return BuildProfile(raw)
    except ValueError:
        logger.warning(f"Unknown ALIVE_BUILD_PROFILE='{raw}', defaulting to PRODUCTION")
        return BuildProfile.PRODUCTION


def is_test_build() -> bool:
    return get_build_profile() == BuildProfile.TEST


def _path_from_env(name: str, default: Path) -> Path:
    val = os.environ.get(name, "").strip()
    if not val:
        return default
    return Path(val)


def get_execution_log_path() -> Path:
    """Execution log file. Canonical key: ALIVE_EXECUTION_LOG_PATH"""
    return _path_from_env("ALIVE_EXECUTION_LOG_PATH", DEFAULT_EXECUTION_LOG_PATH)


def get_audit_export_path() -> Path:
    """Audit export file. Canonical key: ALIVE_AUDIT_EXPORT_PATH"""
    return _path_from_env("ALIVE_AUDIT_EXPORT_PATH", DEFAULT_AUDIT_EXPORT_PATH)


def get_config() -> STGConfig:
    """Snapshot of the current configuration."""
    return STGConfig(
        profile=get_build_profile(),
        execution_log_path=get_execution_log_path(),
        audit_export_path=get_audit_export_path(),
    )
