"""Abstract base class for resolved credentials.

This module defines the interface every credential produced by
:mod:`adcred.resolver` exposes to the HTTP layer that consumes it:

- :attr:`Credentials.kind` -- the closed tag saying which concrete class
  was produced, so callers can branch without ``isinstance`` chains.
- :attr:`Credentials.token` -- the current access token. adcred never
  fetches tokens; the layer that exchanges refresh tokens or signed
  assertions sets this attribute.
- :meth:`Credentials.authorization_header` and :meth:`Credentials.apply`
  -- turn the token into an ``Authorization`` header.

To add a credential kind, subclass :class:`Credentials`, return a new
:class:`~adcred.models.ResolvedKind` from :attr:`kind`, and implement
:meth:`summary`.

See Also:
    :mod:`adcred.resolver` for how credentials are discovered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import MutableMapping, Optional

from adcred.exceptions import TokenUnavailableError
from adcred.models import ResolvedKind


def redact(secret: str) -> str:
    """Mask all but the last four characters of *secret*."""
    if len(secret) <= 4:
        return "****"
    return "****" + secret[-4:]


class Credentials(ABC):
    """Abstract base class for resolved credentials.

    Every concrete credential must provide:

    1. A :attr:`kind` property returning its
       :class:`~adcred.models.ResolvedKind`.
    2. A :meth:`summary` implementation returning display-safe fields.

    Instances are created fresh for every resolution call and share no
    state with each other.
    """

    def __init__(self) -> None:
        self.token: Optional[str] = None

    @property
    @abstractmethod
    def kind(self) -> ResolvedKind:
        """Return which concrete credential this is."""
        ...

    @abstractmethod
    def summary(self) -> dict[str, str]:
        """Return the identifying fields of this credential with secrets redacted.

        Returns:
            A flat mapping suitable for a table or JSON output. Always
            contains a ``"kind"`` entry.
        """
        ...

    def authorization_header(self) -> Optional[str]:
        """Return the ``Authorization`` header value for an HTTP request.

        Returns:
            ``"Bearer <token>"``.

        Raises:
            TokenUnavailableError: If no token has been attached yet.
        """
        if not self.token:
            raise TokenUnavailableError(
                f"No access token attached to {self.kind.value} credentials; "
                "refresh them before signing requests"
            )
        return f"Bearer {self.token}"

    def apply(self, headers: MutableMapping[str, str]) -> None:
        """Add the ``authorization`` header to *headers* when there is one.

        Args:
            headers: Request headers, modified in place.

        Raises:
            TokenUnavailableError: If no token has been attached yet.
        """
        value = self.authorization_header()
        if value is not None:
            headers["authorization"] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r})"
