"""adcred -- Application Default Credentials discovery for Google Cloud.

Decides, for a process running without explicit credentials, which
credential to use: a key file named by ``GOOGLE_APPLICATION_CREDENTIALS``,
the user credentials written by ``gcloud auth application-default login``,
or the Compute Engine metadata server identity. The result is a typed
credential object; obtaining access tokens is left to the caller's HTTP
layer.

Typical usage::

    from adcred import resolve_default_credentials

    credentials = resolve_default_credentials()
    print(credentials.kind)

Modules:
    resolver: The discovery chain and the narrower loading entry points.
    credentials: Credential classes and their builders.
    loader / classifier: Reading and parsing credentials files.
    paths: Platform-specific well-known gcloud path.
    metadata: Compute Engine detection.
    environment: Injectable environment-variable lookup.
    models: Pydantic models shared across the package.
    exceptions: Exception hierarchy with exit-code mapping.
    app: The ``adcred`` diagnostic CLI.
"""

__version__ = "0.1.0"

from adcred.credentials import (  # noqa: E402
    AnonymousCredentials,
    AuthorizedUserCredentials,
    ComputeEngineCredentials,
    Credentials,
    ServiceAccountCredentials,
)
from adcred.models import ResolvedKind  # noqa: E402
from adcred.resolver import (  # noqa: E402
    AdcResolver,
    create_anonymous_credentials,
    create_compute_engine_credentials,
    load_authorized_user_from_contents,
    load_authorized_user_from_path,
    load_service_account_from_contents,
    load_service_account_from_default_paths,
    load_service_account_from_path,
    resolve_default_credentials,
)

__all__ = [
    "AdcResolver",
    "AnonymousCredentials",
    "AuthorizedUserCredentials",
    "ComputeEngineCredentials",
    "Credentials",
    "ResolvedKind",
    "ServiceAccountCredentials",
    "create_anonymous_credentials",
    "create_compute_engine_credentials",
    "load_authorized_user_from_contents",
    "load_authorized_user_from_path",
    "load_service_account_from_contents",
    "load_service_account_from_default_paths",
    "load_service_account_from_path",
    "resolve_default_credentials",
]
