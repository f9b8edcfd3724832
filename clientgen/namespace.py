"""Resolve logical namespaces to physical directory layouts.

A namespace such as ``pet-store.api`` is the logical form used in source
headers. Its physical form replaces hyphens with underscores in every
segment, so it lands at ``pet_store/api``. Only the logical string is ever
stored; the physical form is always derived from it.
"""

from __future__ import annotations

from .naming import LOGICAL_WORD_SEP, PHYSICAL_WORD_SEP

NAMESPACE_SEP = "."


def resolve_folder(namespace: str) -> list[str]:
    """Split *namespace* into physical path segments."""
    return [
        segment.replace(LOGICAL_WORD_SEP, PHYSICAL_WORD_SEP)
        for segment in namespace.split(NAMESPACE_SEP)
        if segment
    ]


def logical_namespace(*parts: str) -> str:
    """Join namespace parts into the logical, dot-separated form."""
    return NAMESPACE_SEP.join(part for part in parts if part)
