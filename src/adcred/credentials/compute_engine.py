"""Credentials served by the Compute Engine metadata server.

On Google Compute Engine, Cloud Run, GKE and similar platforms every
workload has an attached service-account identity whose tokens come from
the metadata server. No local file is involved: the credential only
records which service account to ask for, ``"default"`` unless the caller
names one.
"""

from __future__ import annotations

from adcred.credentials.base import Credentials
from adcred.models import DEFAULT_SERVICE_ACCOUNT, ResolvedKind


class ComputeEngineCredentials(Credentials):
    """Credentials bound to a service account on the metadata server.

    Args:
        service_account_email: Identity to request tokens for.
    """

    def __init__(self, service_account_email: str = DEFAULT_SERVICE_ACCOUNT) -> None:
        super().__init__()
        self._service_account_email = service_account_email

    @property
    def kind(self) -> ResolvedKind:
        return ResolvedKind.COMPUTE_ENGINE

    @property
    def service_account_email(self) -> str:
        return self._service_account_email

    def summary(self) -> dict[str, str]:
        return {
            "kind": self.kind.value,
            "service_account_email": self._service_account_email,
        }
