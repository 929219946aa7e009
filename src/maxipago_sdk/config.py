"""Connector configuration read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_TIMEOUT = 60.0


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in TRUTHY


@dataclass
class MaxipagoConfig:
    """Credentials and operating mode for a maxiPago! connector."""
    merchant_id: str = ""
    merchant_key: str = ""
    test: bool = False
    processor_id: Optional[str] = None  # live mode routing id, processor default applies when unset
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "MaxipagoConfig":
        """Build a config from MAXIPAGO_* environment variables."""
        timeout = os.getenv("MAXIPAGO_TIMEOUT")
        return cls(
            merchant_id=os.getenv("MAXIPAGO_MERCHANT_ID", ""),
            merchant_key=os.getenv("MAXIPAGO_MERCHANT_KEY", ""),
            test=_env_flag("MAXIPAGO_TEST_MODE"),
            processor_id=os.getenv("MAXIPAGO_PROCESSOR_ID") or None,
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        )
