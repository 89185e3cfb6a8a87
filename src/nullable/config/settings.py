"""Library settings — environment variables over code defaults.

Priority chain (highest to lowest):
  1. Init kwargs  — explicit ``NullableSettings(...)`` construction
  2. Env vars     — ``NULLABLE_*`` prefix
  3. Code defaults

The codec and storage layers read the process-wide instance from
:func:`get_settings`; call ``get_settings.cache_clear()`` after changing
the environment.
"""

from __future__ import annotations

import functools

from pydantic_settings import BaseSettings


class NullableSettings(BaseSettings):
    """Behaviour switches for decoding, scanning and logging.

    Attributes:
        strict_decode: Decode JSON in pydantic strict mode, so ``"42"``
            is not accepted for an ``int`` element.
        scan_parse_text: Allow storage text to be parsed into numeric,
            boolean and temporal element types.
        verbose: DEBUG-level output from the ``nullable`` logger.
        log_json: Render log records as JSON lines.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NULLABLE_",
    }

    strict_decode: bool = True
    scan_parse_text: bool = True

    verbose: bool = False
    log_json: bool = False


@functools.lru_cache(maxsize=1)
def get_settings() -> NullableSettings:
    """Return the cached process-wide settings."""
    return NullableSettings()
