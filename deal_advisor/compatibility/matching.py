"""
Fuzzy text matching used by the strategic and geographic alignment scores.

Matching rules
--------------
- Comparison is case-insensitive substring containment after trimming
  surrounding whitespace.
- Blank terms and blank texts never match (an empty string would otherwise
  be a substring of everything).
- ``contains_term``   : one-way — is ``term`` inside ``text``?
- ``mutual_contains`` : two-way — is either string inside the other?
  ("Singapore" vs "Singapore Region", "Europe" vs "Western Europe").

These are pure functions with no knowledge of the scoring weights.
"""

from __future__ import annotations

from typing import Iterable


def _fold(value: str | None) -> str:
    return (value or "").strip().casefold()


def contains_term(text: str | None, term: str | None) -> bool:
    """Return ``True`` if ``term`` occurs in ``text``, ignoring case."""
    folded_text = _fold(text)
    folded_term = _fold(term)
    if not folded_text or not folded_term:
        return False
    return folded_term in folded_text


def any_term_in(terms: Iterable[str], *texts: str | None) -> bool:
    """Return ``True`` if any of ``terms`` occurs in any of ``texts``.

    Example::

        any_term_in(["Partnership"], "Joint venture", "Strategic Partnership")
        -> True
    """
    candidates = [t for t in texts if _fold(t)]
    return any(contains_term(text, term) for term in terms for text in candidates)


def mutual_contains(a: str | None, b: str | None) -> bool:
    """Return ``True`` if either string contains the other, ignoring case."""
    folded_a = _fold(a)
    folded_b = _fold(b)
    if not folded_a or not folded_b:
        return False
    return folded_a in folded_b or folded_b in folded_a


def any_mutual_match(candidates: Iterable[str], target: str | None) -> bool:
    """Return ``True`` if any candidate mutually contains ``target``."""
    return any(mutual_contains(candidate, target) for candidate in candidates)
