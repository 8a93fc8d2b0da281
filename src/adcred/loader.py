"""Credential file loader.

Turns a path (or bytes already in memory) into a
:class:`~adcred.models.RawCredentialPayload`. The loader only reads; it
never interprets the contents. Failures are split into two kinds because
the resolver treats them differently:

* :class:`~adcred.exceptions.CredentialsNotFoundError` -- the path could
  not be opened because nothing readable is there (empty path, missing
  file, a directory).
* :class:`~adcred.exceptions.CredentialsReadError` -- something is there
  but the process cannot read it (permissions, I/O error mid-read).
"""

from __future__ import annotations

import logging

from adcred.exceptions import CredentialsNotFoundError, CredentialsReadError
from adcred.models import CredentialSource, CredentialSourceKind, RawCredentialPayload

logger = logging.getLogger(__name__)

_NOT_FOUND_ERRORS = (FileNotFoundError, IsADirectoryError, NotADirectoryError)


def load_file(
    path: str,
    kind: CredentialSourceKind = CredentialSourceKind.EXPLICIT_PATH,
) -> RawCredentialPayload:
    """Read the full contents of a credentials file.

    Args:
        path: File to read. An empty string is reported as not found.
        kind: How the caller discovered *path*; recorded in the payload's
            source for error messages.

    Returns:
        The raw bytes tagged with their source.

    Raises:
        CredentialsNotFoundError: If *path* is empty, does not exist, or
            names a directory.
        CredentialsReadError: If the file exists but cannot be read.
    """
    if not path:
        raise CredentialsNotFoundError(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except _NOT_FOUND_ERRORS as exc:
        raise CredentialsNotFoundError(path) from exc
    except OSError as exc:
        raise CredentialsReadError(path, exc.strerror or str(exc)) from exc

    logger.debug("Read %d bytes from credentials file %s", len(data), path)
    return RawCredentialPayload(
        data=data,
        source=CredentialSource(kind=kind, path=path),
    )


def load_inline(contents: bytes | str) -> RawCredentialPayload:
    """Wrap credentials contents the caller already holds in memory.

    Args:
        contents: JSON text or its UTF-8 bytes.

    Returns:
        A payload whose source is ``inline``; no file is touched.
    """
    if isinstance(contents, str):
        contents = contents.encode("utf-8")
    return RawCredentialPayload(
        data=contents,
        source=CredentialSource(kind=CredentialSourceKind.INLINE),
    )
