"""Read-only access to the environment variables that drive discovery.

Every lookup the resolver performs goes through an :class:`Environment`
so that callers (and tests) can inject a plain mapping instead of mutating
the process-wide ``os.environ``. Passing ``None`` reads the live process
environment at lookup time.

The variable names below are a compatibility surface shared with the
``gcloud`` CLI and the other Google client libraries.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

ADC_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"
"""Explicit path to a credentials file."""

GCLOUD_ADC_PATH_OVERRIDE_ENV_VAR = "GOOGLE_GCLOUD_ADC_PATH_OVERRIDE"
"""Replaces the computed well-known gcloud path, even when set to ``""``."""

GCE_CHECK_OVERRIDE_ENV_VAR = "GOOGLE_RUNNING_ON_GCE_CHECK_OVERRIDE"
"""``"1"`` forces the Compute Engine probe to true, any other value to false."""

GCE_METADATA_HOST_ENV_VAR = "GCE_METADATA_HOST"
"""Alternate metadata server host, e.g. an emulator."""

METADATA_TIMEOUT_ENV_VAR = "ADCRED_METADATA_TIMEOUT"
"""Metadata probe timeout in seconds."""

POSIX_HOME_ENV_VAR = "HOME"
WINDOWS_HOME_ENV_VAR = "APPDATA"


class Environment:
    """Side-effect-free view over a set of environment variables.

    Args:
        environ: Mapping to read from. ``None`` means ``os.environ``,
            consulted on every lookup so later changes are visible.

    Example::

        env = Environment({"GOOGLE_APPLICATION_CREDENTIALS": "/tmp/key.json"})
        assert env.lookup(ADC_ENV_VAR) == "/tmp/key.json"
        assert env.lookup("UNSET") is None
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    def lookup(self, name: str) -> Optional[str]:
        """Return the value of *name*, or ``None`` when it is unset.

        An empty string is a value, not an absence.
        """
        environ = os.environ if self._environ is None else self._environ
        return environ.get(name)

    def __repr__(self) -> str:
        origin = "os.environ" if self._environ is None else "mapping"
        return f"Environment({origin})"


def as_environment(environ: Environment | Mapping[str, str] | None) -> Environment:
    """Coerce *environ* into an :class:`Environment`."""
    if isinstance(environ, Environment):
        return environ
    return Environment(environ)
