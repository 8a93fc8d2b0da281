"""Canonical Pydantic models shared across all adcred modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Discovery models** -- describe where credentials contents came from and
what they look like once parsed:
    :class:`CredentialSourceKind`, :class:`CredentialSource`,
    :class:`RawCredentialPayload`, :class:`CredentialKind`, and
    :class:`CredentialDocument`.

**Credential field models** -- the validated field sets a builder extracts
from a document:
    :class:`AuthorizedUserFields` and :class:`ServiceAccountFields`.

**Settings and result tags** -- :class:`ProbeSettings` and
:class:`ResolvedKind`.

All models are frozen; a value built for one resolution call is never
mutated afterwards.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
DEFAULT_SERVICE_ACCOUNT = "default"
DEFAULT_METADATA_HOST = "metadata.google.internal"


# --- Discovery ---


class CredentialSourceKind(str, enum.Enum):
    """How the raw credentials bytes were obtained."""

    ENV_VAR = "env_var"
    WELL_KNOWN_FILE = "well_known_file"
    EXPLICIT_PATH = "explicit_path"
    INLINE = "inline"


class CredentialSource(BaseModel):
    """Tags a payload with its origin, used only to build error messages.

    Example::

        CredentialSource(kind=CredentialSourceKind.ENV_VAR, path="/etc/key.json")
    """

    model_config = ConfigDict(frozen=True)

    kind: CredentialSourceKind
    path: Optional[str] = Field(
        default=None, description="File path; None for inline contents"
    )

    @property
    def label(self) -> str:
        """Human-readable origin, e.g. ``credentials file /etc/key.json``."""
        if self.kind == CredentialSourceKind.INLINE or self.path is None:
            return "credentials contents"
        return f"credentials file {self.path}"


class RawCredentialPayload(BaseModel):
    """Unparsed credentials bytes plus the source they came from."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    source: CredentialSource


class CredentialKind(str, enum.Enum):
    """Credential kinds a credentials document can encode."""

    AUTHORIZED_USER = "authorized_user"
    SERVICE_ACCOUNT = "service_account"
    UNSUPPORTED = "unsupported"


class CredentialDocument(BaseModel):
    """A credentials payload parsed into a JSON object.

    The ``type`` discriminator is kept verbatim in :attr:`raw_type` so that
    an unsupported value can be reported back to the user exactly as it was
    written.
    """

    model_config = ConfigDict(frozen=True)

    contents: dict[str, Any]
    source: CredentialSource
    raw_type: str = ""

    @property
    def kind(self) -> CredentialKind:
        if self.raw_type == CredentialKind.AUTHORIZED_USER.value:
            return CredentialKind.AUTHORIZED_USER
        if self.raw_type == CredentialKind.SERVICE_ACCOUNT.value:
            return CredentialKind.SERVICE_ACCOUNT
        return CredentialKind.UNSUPPORTED


# --- Credential fields ---


class AuthorizedUserFields(BaseModel):
    """Fields of a user credential written by ``gcloud auth application-default login``."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    refresh_token: str
    token_uri: str = DEFAULT_TOKEN_URI
    quota_project_id: Optional[str] = None


class ServiceAccountFields(BaseModel):
    """Fields of a service-account JSON key plus caller-supplied overrides.

    ``scopes`` and ``subject`` never come from the key file; they are
    applied at construction time by the caller. An empty ``scopes`` set
    means "use the provider's default scopes".
    """

    model_config = ConfigDict(frozen=True)

    client_email: str
    private_key: str
    private_key_id: str = ""
    token_uri: str = DEFAULT_TOKEN_URI
    project_id: Optional[str] = None
    scopes: frozenset[str] = Field(default_factory=frozenset)
    subject: Optional[str] = Field(
        default=None, description="User to impersonate via domain-wide delegation"
    )


# --- Settings and results ---


class ProbeSettings(BaseModel):
    """Settings for the Compute Engine metadata-server probe."""

    model_config = ConfigDict(frozen=True)

    metadata_host: str = Field(
        default=DEFAULT_METADATA_HOST, description="Metadata server host[:port]"
    )
    timeout: float = Field(
        default=1.0, gt=0, description="Probe timeout in seconds"
    )


class ResolvedKind(str, enum.Enum):
    """Which concrete credential a resolution produced.

    Every :class:`~adcred.credentials.base.Credentials` subclass reports
    exactly one of these values through its ``kind`` property.
    """

    AUTHORIZED_USER = "authorized_user"
    SERVICE_ACCOUNT = "service_account"
    COMPUTE_ENGINE = "compute_engine"
    ANONYMOUS = "anonymous"
