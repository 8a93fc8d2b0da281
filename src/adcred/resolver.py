"""Application Default Credentials resolver.

The :class:`AdcResolver` walks the discovery chain and returns one
:class:`~adcred.credentials.Credentials`:

1. ``GOOGLE_APPLICATION_CREDENTIALS`` names a file: load it. A missing
   file is fatal, since an explicit setting that points nowhere is a
   configuration error.
2. Otherwise the well-known gcloud file: load it if present. A missing
   file falls through; any other failure (unreadable, malformed) is fatal.
3. No file: if the process runs on Compute Engine, return credentials for
   the ``default`` service account.
4. Otherwise fail with :class:`~adcred.exceptions.DefaultCredentialsError`.

Whenever a file was loaded, its ``type`` decides the builder; an
unsupported type fails with a message naming the file.

Besides the full chain, the resolver offers narrower entry points for
callers that already know which kind they want. The module-level
functions wrap a fresh :class:`AdcResolver` reading the process
environment.

Typical usage::

    from adcred import resolve_default_credentials

    credentials = resolve_default_credentials()
    if credentials.kind is ResolvedKind.SERVICE_ACCOUNT:
        ...
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping, Optional

from adcred.classifier import classify
from adcred.credentials import (
    AnonymousCredentials,
    AuthorizedUserCredentials,
    ComputeEngineCredentials,
    Credentials,
    ServiceAccountCredentials,
    build_authorized_user,
    build_service_account,
)
from adcred.environment import ADC_ENV_VAR, Environment, as_environment
from adcred.exceptions import (
    CredentialsNotFoundError,
    DefaultCredentialsError,
    UnsupportedCredentialTypeError,
)
from adcred.loader import load_file, load_inline
from adcred.metadata import is_running_on_compute_engine
from adcred.models import (
    DEFAULT_SERVICE_ACCOUNT,
    CredentialDocument,
    CredentialKind,
    CredentialSourceKind,
    RawCredentialPayload,
)
from adcred.paths import WellKnownPathResolver, default_path_resolver

logger = logging.getLogger(__name__)

ADC_HELP_URL = "https://developers.google.com/identity/protocols/application-default-credentials"

Probe = Callable[[Environment], bool]


class AdcResolver:
    """Discover credentials from an environment.

    Holds no mutable state; one instance may be used repeatedly and from
    several threads.

    Args:
        environ: Environment variables to read. ``None`` reads the live
            process environment.
        path_resolver: Computes the well-known gcloud path; defaults to
            the resolver for the current platform.
        probe: Decides whether the process runs on Compute Engine;
            defaults to :func:`~adcred.metadata.is_running_on_compute_engine`.

    Example::

        resolver = AdcResolver({"GOOGLE_APPLICATION_CREDENTIALS": "/etc/key.json"})
        credentials = resolver.resolve_default_credentials()
    """

    def __init__(
        self,
        environ: Environment | Mapping[str, str] | None = None,
        path_resolver: Optional[WellKnownPathResolver] = None,
        probe: Optional[Probe] = None,
    ) -> None:
        self._env = as_environment(environ)
        self._path_resolver = path_resolver or default_path_resolver()
        self._probe = probe or is_running_on_compute_engine

    @property
    def environment(self) -> Environment:
        return self._env

    @property
    def path_resolver(self) -> WellKnownPathResolver:
        return self._path_resolver

    # ------------------------------------------------------------------ #
    # Full discovery chain
    # ------------------------------------------------------------------ #

    def resolve_default_credentials(
        self,
        scopes: Optional[Iterable[str]] = None,
        subject: Optional[str] = None,
    ) -> Credentials:
        """Run the full Application Default Credentials chain.

        Args:
            scopes: Scopes to attach if a service-account key is found.
            subject: Delegation subject to attach if a service-account key
                is found.

        Returns:
            Authorized-user, service-account, or Compute Engine credentials.

        Raises:
            CredentialsNotFoundError: If ``GOOGLE_APPLICATION_CREDENTIALS``
                names a file that cannot be opened.
            CredentialsReadError: If a discovered file cannot be read.
            InvalidArgumentError: If a discovered file is malformed,
                incomplete, or of an unsupported type.
            DefaultCredentialsError: If no step produced credentials.
        """
        payload = self._load_from_default_paths()
        if payload is not None:
            return self._build(classify(payload), scopes, subject)

        if self._probe(self._env):
            logger.debug("Running on Compute Engine; using the metadata server identity")
            return ComputeEngineCredentials(DEFAULT_SERVICE_ACCOUNT)

        raise DefaultCredentialsError(
            "Could not automatically determine credentials. "
            f"For more information, please see {ADC_HELP_URL}"
        )

    # ------------------------------------------------------------------ #
    # Restricted entry points
    # ------------------------------------------------------------------ #

    def load_authorized_user_from_path(self, path: str) -> AuthorizedUserCredentials:
        """Load authorized-user credentials from a file, rejecting other kinds."""
        return self._authorized_user(
            classify(load_file(path, CredentialSourceKind.EXPLICIT_PATH))
        )

    def load_authorized_user_from_contents(
        self, contents: bytes | str
    ) -> AuthorizedUserCredentials:
        """Load authorized-user credentials from JSON already in memory."""
        return self._authorized_user(classify(load_inline(contents)))

    def load_service_account_from_path(
        self,
        path: str,
        scopes: Optional[Iterable[str]] = None,
        subject: Optional[str] = None,
    ) -> ServiceAccountCredentials:
        """Load service-account credentials from a key file, rejecting other kinds."""
        return self._service_account(
            classify(load_file(path, CredentialSourceKind.EXPLICIT_PATH)),
            scopes,
            subject,
        )

    def load_service_account_from_contents(
        self,
        contents: bytes | str,
        scopes: Optional[Iterable[str]] = None,
        subject: Optional[str] = None,
    ) -> ServiceAccountCredentials:
        """Load service-account credentials from key JSON already in memory."""
        return self._service_account(classify(load_inline(contents)), scopes, subject)

    def load_service_account_from_default_paths(
        self,
        scopes: Optional[Iterable[str]] = None,
        subject: Optional[str] = None,
    ) -> ServiceAccountCredentials:
        """Load a service-account key from the ADC file locations only.

        Follows the same precedence as steps 1 and 2 of
        :meth:`resolve_default_credentials` but never falls back to Compute
        Engine, and rejects any file that is not a service-account key,
        including a valid authorized-user file.

        Raises:
            UnsupportedCredentialTypeError: If the discovered file is not a
                service-account key.
            DefaultCredentialsError: If neither location has a file.
        """
        payload = self._load_from_default_paths()
        if payload is None:
            raise DefaultCredentialsError(
                "Could not create service account credentials using Application "
                "Default Credentials paths. "
                f"For more information, please see {ADC_HELP_URL}"
            )
        return self._service_account(classify(payload), scopes, subject)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _load_from_default_paths(self) -> Optional[RawCredentialPayload]:
        """Steps 1 and 2 of the chain; ``None`` when neither produced a file."""
        env_path = self._env.lookup(ADC_ENV_VAR)
        if env_path:
            logger.debug("Loading credentials named by %s: %s", ADC_ENV_VAR, env_path)
            return load_file(env_path, CredentialSourceKind.ENV_VAR)

        well_known = self._path_resolver.well_known_path(self._env)
        if not well_known:
            logger.debug("No well-known gcloud credentials path")
            return None
        try:
            return load_file(well_known, CredentialSourceKind.WELL_KNOWN_FILE)
        except CredentialsNotFoundError:
            logger.debug("No gcloud credentials file at %s", well_known)
            return None

    def _build(
        self,
        document: CredentialDocument,
        scopes: Optional[Iterable[str]],
        subject: Optional[str],
    ) -> Credentials:
        if document.kind is CredentialKind.AUTHORIZED_USER:
            return build_authorized_user(document)
        if document.kind is CredentialKind.SERVICE_ACCOUNT:
            return build_service_account(document, scopes, subject)
        raise UnsupportedCredentialTypeError(document.raw_type, document.source.label)

    def _authorized_user(self, document: CredentialDocument) -> AuthorizedUserCredentials:
        if document.kind is not CredentialKind.AUTHORIZED_USER:
            raise UnsupportedCredentialTypeError(document.raw_type, document.source.label)
        return build_authorized_user(document)

    def _service_account(
        self,
        document: CredentialDocument,
        scopes: Optional[Iterable[str]],
        subject: Optional[str],
    ) -> ServiceAccountCredentials:
        if document.kind is not CredentialKind.SERVICE_ACCOUNT:
            raise UnsupportedCredentialTypeError(document.raw_type, document.source.label)
        return build_service_account(document, scopes, subject)


# ------------------------------------------------------------------ #
# Module-level convenience functions
# ------------------------------------------------------------------ #


def resolve_default_credentials(
    scopes: Optional[Iterable[str]] = None,
    subject: Optional[str] = None,
    environ: Mapping[str, str] | None = None,
) -> Credentials:
    """Run the full discovery chain against *environ* (default: the process environment)."""
    return AdcResolver(environ).resolve_default_credentials(scopes, subject)


def load_authorized_user_from_path(path: str) -> AuthorizedUserCredentials:
    return AdcResolver().load_authorized_user_from_path(path)


def load_authorized_user_from_contents(contents: bytes | str) -> AuthorizedUserCredentials:
    return AdcResolver().load_authorized_user_from_contents(contents)


def load_service_account_from_path(
    path: str,
    scopes: Optional[Iterable[str]] = None,
    subject: Optional[str] = None,
) -> ServiceAccountCredentials:
    return AdcResolver().load_service_account_from_path(path, scopes, subject)


def load_service_account_from_contents(
    contents: bytes | str,
    scopes: Optional[Iterable[str]] = None,
    subject: Optional[str] = None,
) -> ServiceAccountCredentials:
    return AdcResolver().load_service_account_from_contents(contents, scopes, subject)


def load_service_account_from_default_paths(
    scopes: Optional[Iterable[str]] = None,
    subject: Optional[str] = None,
    environ: Mapping[str, str] | None = None,
) -> ServiceAccountCredentials:
    """Load a service-account key from the ADC file locations of *environ*."""
    return AdcResolver(environ).load_service_account_from_default_paths(scopes, subject)


def create_compute_engine_credentials(
    service_account_email: str = DEFAULT_SERVICE_ACCOUNT,
) -> ComputeEngineCredentials:
    """Build Compute Engine credentials directly, without any discovery."""
    return ComputeEngineCredentials(service_account_email)


def create_anonymous_credentials() -> AnonymousCredentials:
    """Build credentials that leave requests unauthenticated."""
    return AnonymousCredentials()
