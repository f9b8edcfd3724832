"""Convert raw names from the API document into target identifiers.

Target identifiers are dash-case: lower-case words joined by hyphens.
Any input casing normalizes to the same output:

  listPets      -> list-pets
  list_pets     -> list-pets
  ListPets      -> list-pets
  HTTPResponse  -> http-response
  pet.id!       -> petid

Characters outside [A-Za-z0-9_-] are dropped before case conversion.
Only operation ids are required to be non-empty afterwards.
"""

from __future__ import annotations

import enum
import re

from .errors import FatalInputError

# Characters allowed to survive sanitization
_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_-]+")
_DISALLOWED_TAG_CHARS = re.compile(r"[^A-Za-z_]+")
_WORD_SEPARATORS = re.compile(r"[-_\s]+")

# Logical (dash) and physical (underscore) word separators
LOGICAL_WORD_SEP = "-"
PHYSICAL_WORD_SEP = "_"


class NamingRole(enum.Enum):
    MODEL_NAME = "model"
    VAR_NAME = "var"
    OPERATION_ID = "operation"
    API_NAME = "api"


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def dashize(word: str) -> str:
    """Dash-case a word, keeping every character that is not a separator."""
    name = _camel_to_snake(word.strip())
    name = _WORD_SEPARATORS.sub(LOGICAL_WORD_SEP, name)
    return name.strip(LOGICAL_WORD_SEP)


def underscore(word: str) -> str:
    """Turn a dash-case name into its filesystem-safe underscore form."""
    return word.replace(LOGICAL_WORD_SEP, PHYSICAL_WORD_SEP)


def to_identifier(raw: str, role: NamingRole = NamingRole.VAR_NAME) -> str:
    """Sanitize *raw* and convert it to dash-case.

    Raises:
        FatalInputError: if *role* is ``OPERATION_ID`` and nothing is left
            after sanitization.
    """
    name = dashize(_DISALLOWED_CHARS.sub("", raw or ""))
    if role is NamingRole.OPERATION_ID and not name:
        raise FatalInputError(
            f"Empty method/operation name (operationId) not allowed: {raw!r}"
        )
    return name


def to_var_name(name: str) -> str:
    return to_identifier(name, NamingRole.VAR_NAME)


def to_param_name(name: str) -> str:
    return to_var_name(name)


def to_model_name(name: str) -> str:
    return to_identifier(name, NamingRole.MODEL_NAME)


def to_operation_id(operation_id: str) -> str:
    """Sanitize an operation id; an empty result aborts generation."""
    return to_identifier(operation_id, NamingRole.OPERATION_ID)


def to_api_name(name: str) -> str:
    return to_identifier(name, NamingRole.API_NAME)


def to_api_filename(name: str) -> str:
    """Return the API name as a bare filename stem (``pet-store`` -> ``pet_store``)."""
    return underscore(to_api_name(name))


def sanitize_tag(tag: str) -> str:
    """Replace every run of characters outside [A-Za-z_] with an underscore."""
    return _DISALLOWED_TAG_CHARS.sub("_", tag)
