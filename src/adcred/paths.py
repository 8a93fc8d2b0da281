"""Well-known location of the gcloud Application Default Credentials file.

``gcloud auth application-default login`` writes user credentials to a
fixed, OS-dependent path:

* Linux, macOS, BSD: ``$HOME/.config/gcloud/application_default_credentials.json``
* Windows: ``%APPDATA%\\gcloud\\application_default_credentials.json``

The computation sits behind :class:`WellKnownPathResolver` so that the
resolver never needs to know which platform it runs on; tests can pick a
concrete resolver explicitly.
"""

from __future__ import annotations

import platform
from abc import ABC, abstractmethod
from pathlib import PurePath, PurePosixPath, PureWindowsPath

from adcred.environment import (
    GCLOUD_ADC_PATH_OVERRIDE_ENV_VAR,
    POSIX_HOME_ENV_VAR,
    WINDOWS_HOME_ENV_VAR,
    Environment,
)

ADC_FILENAME = "application_default_credentials.json"


class WellKnownPathResolver(ABC):
    """Compute the default gcloud ADC path from the environment.

    Subclasses declare the home-directory variable and the segments below
    it; :meth:`well_known_path` applies the override rules shared by every
    platform.
    """

    @property
    @abstractmethod
    def home_env_var(self) -> str:
        """Name of the environment variable holding the base directory."""
        ...

    @property
    @abstractmethod
    def segments(self) -> tuple[str, ...]:
        """Path segments below the base directory, file name included."""
        ...

    @abstractmethod
    def _join(self, root: str) -> PurePath:
        ...

    def well_known_path(self, env: Environment) -> str:
        """Return the gcloud ADC path, or ``""`` when there is none.

        If ``GOOGLE_GCLOUD_ADC_PATH_OVERRIDE`` is set its value is returned
        verbatim, including the empty string, which tells the resolver to
        skip this step. Otherwise the path is derived from
        :attr:`home_env_var`; an unset or empty home yields ``""``.

        Args:
            env: Environment to read from.

        Returns:
            The path as a string.
        """
        override = env.lookup(GCLOUD_ADC_PATH_OVERRIDE_ENV_VAR)
        if override is not None:
            return override
        root = env.lookup(self.home_env_var)
        if not root:
            return ""
        return str(self._join(root))


class PosixPathResolver(WellKnownPathResolver):
    """``$HOME/.config/gcloud/application_default_credentials.json``."""

    @property
    def home_env_var(self) -> str:
        return POSIX_HOME_ENV_VAR

    @property
    def segments(self) -> tuple[str, ...]:
        return (".config", "gcloud", ADC_FILENAME)

    def _join(self, root: str) -> PurePath:
        return PurePosixPath(root, *self.segments)


class WindowsPathResolver(WellKnownPathResolver):
    """``%APPDATA%\\gcloud\\application_default_credentials.json``."""

    @property
    def home_env_var(self) -> str:
        return WINDOWS_HOME_ENV_VAR

    @property
    def segments(self) -> tuple[str, ...]:
        return ("gcloud", ADC_FILENAME)

    def _join(self, root: str) -> PurePath:
        return PureWindowsPath(root, *self.segments)


def _is_windows() -> bool:
    return platform.system() == "Windows"


def default_path_resolver() -> WellKnownPathResolver:
    """Return the resolver for the platform the process runs on."""
    if _is_windows():
        return WindowsPathResolver()
    return PosixPathResolver()


def well_known_adc_path(env: Environment | None = None) -> str:
    """Compute the well-known ADC path for this platform.

    Args:
        env: Environment to read from; defaults to the process environment.
    """
    return default_path_resolver().well_known_path(env or Environment())
