"""User credentials created by ``gcloud auth application-default login``.

Provides :class:`AuthorizedUserCredentials` and its builder,
:func:`build_authorized_user`, which validates an ``authorized_user``
document. A valid document has non-empty string values for
``client_id``, ``client_secret`` and ``refresh_token``; ``token_uri`` and
``quota_project_id`` are optional.
"""

from __future__ import annotations

from typing import Any, Optional

from adcred.credentials.base import Credentials, redact
from adcred.exceptions import MissingFieldError
from adcred.models import (
    DEFAULT_TOKEN_URI,
    AuthorizedUserFields,
    CredentialDocument,
    ResolvedKind,
)

REQUIRED_FIELDS = ("client_id", "client_secret", "refresh_token")


class AuthorizedUserCredentials(Credentials):
    """OAuth2 user credentials backed by a refresh token.

    Args:
        fields: The validated fields from the credentials document.
    """

    def __init__(self, fields: AuthorizedUserFields) -> None:
        super().__init__()
        self.fields = fields

    @property
    def kind(self) -> ResolvedKind:
        return ResolvedKind.AUTHORIZED_USER

    @property
    def client_id(self) -> str:
        return self.fields.client_id

    @property
    def token_uri(self) -> str:
        return self.fields.token_uri

    def summary(self) -> dict[str, str]:
        data = {
            "kind": self.kind.value,
            "client_id": self.fields.client_id,
            "client_secret": redact(self.fields.client_secret),
            "refresh_token": redact(self.fields.refresh_token),
            "token_uri": self.fields.token_uri,
        }
        if self.fields.quota_project_id:
            data["quota_project_id"] = self.fields.quota_project_id
        return data


def _optional_str(contents: dict[str, Any], key: str) -> Optional[str]:
    value = contents.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def build_authorized_user(document: CredentialDocument) -> AuthorizedUserCredentials:
    """Validate an ``authorized_user`` document and build credentials from it.

    Args:
        document: A classified document of kind ``authorized_user``.

    Returns:
        A fresh :class:`AuthorizedUserCredentials`.

    Raises:
        MissingFieldError: If a required field is absent, empty, or not a
            string. The message names the field and the source.
    """
    contents = document.contents
    for key in REQUIRED_FIELDS:
        value = contents.get(key)
        if not isinstance(value, str) or not value:
            raise MissingFieldError(
                f"Invalid AuthorizedUserCredentials, the {key} field is missing "
                f"or empty in {document.source.label}.",
                field=key,
            )

    fields = AuthorizedUserFields(
        client_id=contents["client_id"],
        client_secret=contents["client_secret"],
        refresh_token=contents["refresh_token"],
        token_uri=_optional_str(contents, "token_uri") or DEFAULT_TOKEN_URI,
        quota_project_id=_optional_str(contents, "quota_project_id"),
    )
    return AuthorizedUserCredentials(fields)
