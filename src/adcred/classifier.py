"""Credential type classifier.

Parses a :class:`~adcred.models.RawCredentialPayload` as a JSON object and
reads its ``type`` discriminator. An unknown or missing ``type`` is not an
error at this layer: the resulting document reports
:attr:`~adcred.models.CredentialKind.UNSUPPORTED` and the resolver decides
how to word the failure.
"""

from __future__ import annotations

import json

from adcred.exceptions import MalformedCredentialsError
from adcred.models import CredentialDocument, RawCredentialPayload


def classify(payload: RawCredentialPayload) -> CredentialDocument:
    """Parse *payload* and extract its credential kind.

    Args:
        payload: Raw bytes from the loader.

    Returns:
        The parsed document. Check ``document.kind`` for the credential
        kind and ``document.raw_type`` for the verbatim ``type`` value.

    Raises:
        MalformedCredentialsError: If the bytes are not UTF-8 JSON or the
            top-level value is not an object. The message names the source.
    """
    label = payload.source.label
    try:
        parsed = json.loads(payload.data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedCredentialsError(f"Invalid JSON in {label}: {exc}") from exc

    if not isinstance(parsed, dict):
        raise MalformedCredentialsError(
            f"Invalid JSON in {label}: expected an object, "
            f"got {type(parsed).__name__}"
        )

    raw_type = parsed.get("type")
    return CredentialDocument(
        contents=parsed,
        source=payload.source,
        raw_type="" if raw_type is None else str(raw_type),
    )
