"""Singular and plural forms of group names."""

from __future__ import annotations

import inflection


def name_forms(name: str) -> tuple[str, str]:
    """Return ``(plural, singular)`` English forms of ``name``.

    Works from either form: ``"spies"`` and ``"spy"`` both give
    ``("spies", "spy")``.
    """
    singular = inflection.singularize(name)
    return inflection.pluralize(singular), singular


__all__ = ["name_forms"]
