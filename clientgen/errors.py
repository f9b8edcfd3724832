"""Exception hierarchy for clientgen.

All exceptions inherit from :class:`GeneratorError`, which carries an
``exit_code`` attribute. The entry point catches ``GeneratorError`` and exits
with that code.

Subclass hierarchy::

    GeneratorError     (exit 1)
    +-- FatalInputError  (exit 2)
    +-- SpecLoadError    (exit 3)
"""

from __future__ import annotations

EXIT_GENERIC_FAILURE = 1
EXIT_FATAL_INPUT = 2
EXIT_SPEC_LOAD = 3


class GeneratorError(Exception):
    """Base exception for all clientgen errors.

    Subclasses set a class-level ``exit_code``; the message is printed to
    stderr by the entry point.
    """

    exit_code: int = EXIT_GENERIC_FAILURE


class FatalInputError(GeneratorError):
    """Raised when an operation id sanitizes to an empty identifier.

    Aborts the whole run; no partial render plan is produced.
    """

    exit_code = EXIT_FATAL_INPUT


class SpecLoadError(GeneratorError):
    """Raised when the API document cannot be read or is not a JSON object."""

    exit_code = EXIT_SPEC_LOAD
