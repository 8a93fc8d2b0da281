"""Service-account credentials from a JSON key file.

Provides :class:`ServiceAccountCredentials` and its builder,
:func:`build_service_account`. Only ``client_email`` and ``private_key``
are required. The private key is kept as PEM text and is not parsed here;
a malformed key surfaces when the signing layer first uses it.

Scopes and the domain-wide delegation subject are supplied by the caller
and attached verbatim; the key file cannot set them.
"""

from __future__ import annotations

from typing import Iterable, Optional

from adcred.credentials.base import Credentials
from adcred.exceptions import MissingFieldError
from adcred.models import (
    DEFAULT_TOKEN_URI,
    CredentialDocument,
    ResolvedKind,
    ServiceAccountFields,
)

REQUIRED_FIELDS = ("client_email", "private_key")


class ServiceAccountCredentials(Credentials):
    """Credentials that sign JWT assertions with a service-account key.

    Args:
        fields: The validated key fields plus scopes and subject.
    """

    def __init__(self, fields: ServiceAccountFields) -> None:
        super().__init__()
        self.fields = fields

    @property
    def kind(self) -> ResolvedKind:
        return ResolvedKind.SERVICE_ACCOUNT

    @property
    def service_account_email(self) -> str:
        return self.fields.client_email

    @property
    def scopes(self) -> frozenset[str]:
        return self.fields.scopes

    @property
    def subject(self) -> Optional[str]:
        return self.fields.subject

    def summary(self) -> dict[str, str]:
        data = {
            "kind": self.kind.value,
            "client_email": self.fields.client_email,
            "private_key_id": self.fields.private_key_id,
            "token_uri": self.fields.token_uri,
            "scopes": " ".join(sorted(self.fields.scopes)) or "(default)",
        }
        if self.fields.project_id:
            data["project_id"] = self.fields.project_id
        if self.fields.subject:
            data["subject"] = self.fields.subject
        return data


def build_service_account(
    document: CredentialDocument,
    scopes: Optional[Iterable[str]] = None,
    subject: Optional[str] = None,
) -> ServiceAccountCredentials:
    """Validate a ``service_account`` document and build credentials from it.

    Args:
        document: A classified document of kind ``service_account``.
        scopes: OAuth2 scopes to request. ``None`` or empty means the
            provider's default scopes; a single string is one scope.
        subject: Email of the user to impersonate, if any.

    Returns:
        A fresh :class:`ServiceAccountCredentials`.

    Raises:
        MissingFieldError: If ``client_email`` or ``private_key`` is absent,
            empty, or not a string.
    """
    contents = document.contents
    for key in REQUIRED_FIELDS:
        value = contents.get(key)
        if not isinstance(value, str) or not value:
            raise MissingFieldError(
                f"Invalid ServiceAccountCredentials, the {key} field is missing "
                f"or empty in {document.source.label}.",
                field=key,
            )

    if isinstance(scopes, str):
        scopes = (scopes,) if scopes else None
    project_id = contents.get("project_id")
    fields = ServiceAccountFields(
        client_email=contents["client_email"],
        private_key=contents["private_key"],
        private_key_id=str(contents.get("private_key_id") or ""),
        token_uri=str(contents.get("token_uri") or DEFAULT_TOKEN_URI),
        project_id=project_id if isinstance(project_id, str) and project_id else None,
        scopes=frozenset(scopes or ()),
        subject=subject,
    )
    return ServiceAccountCredentials(fields)
