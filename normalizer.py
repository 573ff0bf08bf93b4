"""
Canonicalize condition names and match them to the reference tables

Purpose: turn a free-text condition name produced by the LLM into a catalog key, then into its
ICD-10 code and textbook citations.

Input: condition: str (e.g. "Acute Myocardial Infarction")

Output: ClassificationCode / tuple of Citation, or None / () when nothing matches.

Example: resolve("Acute Myocardial Infarction") -> ClassificationCode("I21", "Acute myocardial infarction", ...)

Notes: matching is exact key first, then the first key (in table declaration order) that contains
the name or is contained in it. Ties are not disambiguated further, so unrelated conditions that
share a substring can match ("heat stroke" -> stroke, "pulmonary hypertension" -> hypertension).
Callers must pass a non-blank name: an empty string is contained in every key.
"""
from typing import Mapping, Optional, Sequence, Tuple, TypeVar

from reference_catalog import (
    CITATION_ENTRIES,
    ICD10_CODES,
    ICD10_ENTRIES,
    MEDICAL_TEXTBOOKS,
    Citation,
    ClassificationCode,
)

T = TypeVar("T")


def normalize(condition: str) -> str:
    return condition.strip().lower()


def match_key(
    condition: str,
    entries: Sequence[Tuple[str, T]],
    index: Optional[Mapping[str, T]] = None,
) -> Optional[str]:
    """
    Find the table key a condition name resolves to.

    Args:
        condition: Free-text condition name
        entries: Ordered (key, value) pairs; scanned in this order on a partial match
        index: Optional exact-lookup mapping for the same entries

    Returns:
        The matched key, or None if no key matches
    """
    normalized = normalize(condition)

    # Direct match
    if index is not None:
        if normalized in index:
            return normalized
    else:
        for key, _ in entries:
            if key == normalized:
                return key

    # Partial match for complex condition names
    for key, _ in entries:
        if key in normalized or normalized in key:
            return key

    return None


def resolve(condition: str) -> Optional[ClassificationCode]:
    """ICD-10 code for a condition name, or None."""
    key = match_key(condition, ICD10_ENTRIES, ICD10_CODES)
    return ICD10_CODES[key] if key is not None else None


def resolve_citations(condition: str) -> Tuple[Citation, ...]:
    """Textbook citations for a condition name, empty if there are none."""
    key = match_key(condition, CITATION_ENTRIES, MEDICAL_TEXTBOOKS)
    return MEDICAL_TEXTBOOKS[key] if key is not None else ()
