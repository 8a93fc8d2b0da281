"""Numeric process exit codes used by the ``adcred`` command-line tool.

Each constant maps to a specific failure category and is referenced by the
corresponding :class:`~adcred.exceptions.AdcError` subclass. Shell wrappers
and CI scripts can inspect the exit code to tell a configuration problem
from a malformed credentials file without parsing stderr.

Example::

    $ adcred show
    $ echo $?
    3   # EXIT_NO_CREDENTIALS -- no discovery step applied
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_ARGUMENT = 2
"""A credentials payload was malformed, incomplete, or of an unsupported type."""

EXIT_NO_CREDENTIALS = 3
"""No step of the Application Default Credentials chain produced a credential."""

EXIT_NOT_FOUND = 4
"""An explicitly configured credentials file could not be opened."""

EXIT_READ_FAILURE = 5
"""A credentials file exists but could not be read."""
