"""
Configuration for verifiers and waiters.

Provides the default wait timeout and polling interval, plus report and diff
formatting options, with support for loading from environment variables or a
YAML file.

The configuration is an explicit object passed to Verifier and Waiter
constructors. The module-level singleton is only the fallback used when a
caller does not pass one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from affirm.assertions import assert_config


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AffirmConfig:
    """Default timing and formatting settings.

    Environment Variables:
        AFFIRM_DEFAULT_WAIT_IN_SECONDS: Default wait timeout in seconds (default: 5)
        AFFIRM_DEFAULT_WAIT_INTERVAL_IN_MILLIS: Default polling interval in ms (default: 10)
        AFFIRM_PRINT_PASSED_VERIFICATION: Log reports of passing verifications (default: false)
        AFFIRM_DIFF_INSERT_FORMAT: Format for text present only in the actual value (default: |(+){}|)
        AFFIRM_DIFF_DELETE_FORMAT: Format for text present only in the expected value (default: |(-){}|)

    Attributes:
        default_wait_seconds: Timeout used by waiters and eventual verifications
        default_interval_ms: Sleep between polling attempts
        print_passed: Whether passing verification reports are logged at info level
        diff_insert_format: str.format template wrapping inserted text in diffs
        diff_delete_format: str.format template wrapping deleted text in diffs
    """

    default_wait_seconds: float = 5.0
    default_interval_ms: int = 10
    print_passed: bool = False
    diff_insert_format: str = "|(+){}|"
    diff_delete_format: str = "|(-){}|"

    def __post_init__(self) -> None:
        assert_config(
            self.default_wait_seconds >= 0,
            f"default_wait_seconds must not be negative, got {self.default_wait_seconds}",
            field="default_wait_seconds",
        )
        assert_config(
            self.default_interval_ms >= 0,
            f"default_interval_ms must not be negative, got {self.default_interval_ms}",
            field="default_interval_ms",
        )
        for name in ("diff_insert_format", "diff_delete_format"):
            assert_config("{}" in getattr(self, name), f"{name} must contain a '{{}}' placeholder", field=name)

    @classmethod
    def from_env(cls) -> AffirmConfig:
        """Load configuration from environment variables with defaults.

        Returns:
            AffirmConfig with values loaded from environment or defaults
        """
        return cls(
            default_wait_seconds=float(os.getenv("AFFIRM_DEFAULT_WAIT_IN_SECONDS", "5")),
            default_interval_ms=int(os.getenv("AFFIRM_DEFAULT_WAIT_INTERVAL_IN_MILLIS", "10")),
            print_passed=_env_bool("AFFIRM_PRINT_PASSED_VERIFICATION", "false"),
            diff_insert_format=os.getenv("AFFIRM_DIFF_INSERT_FORMAT", "|(+){}|"),
            diff_delete_format=os.getenv("AFFIRM_DIFF_DELETE_FORMAT", "|(-){}|"),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> AffirmConfig:
        """Load configuration from the ``affirm`` section of a YAML file.

        Keys missing from the file keep their defaults.

        Example file:
            affirm:
              default_wait_seconds: 10
              default_interval_ms: 250
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        section: dict[str, Any] = data.get("affirm", {}) if isinstance(data, dict) else {}
        assert_config(isinstance(section, dict), f"'affirm' section in {path} must be a mapping", field="affirm")
        unknown = set(section) - set(cls.__dataclass_fields__)
        assert_config(not unknown, f"Unknown configuration keys in {path}: {sorted(unknown)}")
        return cls(**section)

    def with_overrides(self, **changes: Any) -> AffirmConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


# Singleton for default config (loaded lazily)
_default_config: AffirmConfig | None = None


def get_config() -> AffirmConfig:
    """Get the default AffirmConfig, loading from environment on first call.

    Returns:
        The singleton AffirmConfig instance
    """
    global _default_config
    if _default_config is None:
        _default_config = AffirmConfig.from_env()
    return _default_config


def set_config(config: AffirmConfig) -> None:
    """Replace the default config used by verifiers and waiters built without one."""
    global _default_config
    _default_config = config


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _default_config
    _default_config = None
