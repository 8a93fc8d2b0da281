"""Settings resolved from environment variables.

adcred has no configuration file: everything it needs is read from the
process environment through an :class:`~adcred.environment.Environment`.
This module turns the few tunable variables into validated
:class:`~adcred.models.ProbeSettings`.

Precedence (high to low):
    1. Environment variables (``GCE_METADATA_HOST``, ``ADCRED_METADATA_TIMEOUT``)
    2. Defaults declared on :class:`~adcred.models.ProbeSettings`
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from adcred.environment import (
    GCE_METADATA_HOST_ENV_VAR,
    METADATA_TIMEOUT_ENV_VAR,
    Environment,
)
from adcred.exceptions import ConfigError
from adcred.models import ProbeSettings


def load_probe_settings(env: Environment | None = None) -> ProbeSettings:
    """Build :class:`~adcred.models.ProbeSettings` from the environment.

    Empty values are ignored so that ``GCE_METADATA_HOST=`` behaves like an
    unset variable.

    Args:
        env: Environment to read from; defaults to the process environment.

    Returns:
        The validated settings.

    Raises:
        ConfigError: If ``ADCRED_METADATA_TIMEOUT`` is not a positive number.
    """
    env = env or Environment()
    overrides: dict[str, Any] = {}

    host = env.lookup(GCE_METADATA_HOST_ENV_VAR)
    if host:
        overrides["metadata_host"] = host

    timeout = env.lookup(METADATA_TIMEOUT_ENV_VAR)
    if timeout:
        overrides["timeout"] = timeout

    try:
        return ProbeSettings.model_validate(overrides)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid metadata probe settings from the environment "
            f"({METADATA_TIMEOUT_ENV_VAR}={timeout!r}): {exc}"
        ) from exc
