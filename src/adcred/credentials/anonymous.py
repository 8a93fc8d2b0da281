"""Anonymous credentials for requests that must not be authenticated."""

from __future__ import annotations

from typing import Optional

from adcred.credentials.base import Credentials
from adcred.models import ResolvedKind


class AnonymousCredentials(Credentials):
    """Credentials that never add an ``Authorization`` header.

    Useful for reading publicly accessible resources.
    """

    @property
    def kind(self) -> ResolvedKind:
        return ResolvedKind.ANONYMOUS

    def authorization_header(self) -> Optional[str]:
        return None

    def summary(self) -> dict[str, str]:
        return {"kind": self.kind.value}
