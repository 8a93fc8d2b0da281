"""Resolved credential types and their builders.

Every value returned by :mod:`adcred.resolver` is an instance of one of the
:class:`Credentials` subclasses exported here, tagged by its
:attr:`~Credentials.kind`:

- :class:`AuthorizedUserCredentials` -- user credentials from gcloud.
- :class:`ServiceAccountCredentials` -- a service-account JSON key.
- :class:`ComputeEngineCredentials` -- the metadata-server identity.
- :class:`AnonymousCredentials` -- no authentication at all.

The builders :func:`build_authorized_user` and
:func:`build_service_account` validate a classified
:class:`~adcred.models.CredentialDocument` and construct the matching
credential.
"""

from adcred.credentials.anonymous import AnonymousCredentials
from adcred.credentials.authorized_user import (
    AuthorizedUserCredentials,
    build_authorized_user,
)
from adcred.credentials.base import Credentials
from adcred.credentials.compute_engine import ComputeEngineCredentials
from adcred.credentials.service_account import (
    ServiceAccountCredentials,
    build_service_account,
)

__all__ = [
    "AnonymousCredentials",
    "AuthorizedUserCredentials",
    "ComputeEngineCredentials",
    "Credentials",
    "ServiceAccountCredentials",
    "build_authorized_user",
    "build_service_account",
]
