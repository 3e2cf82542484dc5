"""Logging settings read from ``SOFTASCII_*`` environment variables.

Explicit keyword arguments win over the environment; unset variables fall
back to the field defaults.  There is no config file: the library only has
two knobs, both about how its DEBUG records are shown.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings


class SoftAsciiSettings(BaseSettings):
    """Settings for softascii's logging output.

    Attributes:
        verbose: Show the package's DEBUG records (``SOFTASCII_VERBOSE``).
        log_json: Render records as JSON lines (``SOFTASCII_LOG_JSON``).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SOFTASCII_",
    }

    verbose: bool = False
    log_json: bool = False
