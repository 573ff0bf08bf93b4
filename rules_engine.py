"""
Deterministic evidence and guideline rules

Purpose: apply hard rules independent of the LLM: grade the evidence behind a suggested condition
and list the clinical guidelines that apply to it.

Input: condition name (free text) and the probability (0-100) the LLM assigned to it.

Output: EvidenceTier ("A" | "B" | "C" | "Expert Opinion") and a list of guideline names (or None).

Example: classify("Myocardial infarction", 85) -> EvidenceTier.A

Notes: thresholds are fixed business rules, not a cited grading methodology. Keyword matching is
"condition name contains keyword" only.
"""
from enum import Enum
from typing import List, Optional, Tuple

from normalizer import normalize


class EvidenceTier(str, Enum):
    """Evidence level, strongest first.

    A = randomized controlled trials, meta-analyses
    B = well-designed clinical studies
    C = case series, expert committee reports
    Expert Opinion = clinical experience
    """
    A = "A"
    B = "B"
    C = "C"
    EXPERT_OPINION = "Expert Opinion"

    @property
    def strength(self) -> int:
        return _TIER_STRENGTH[self]

    @classmethod
    def _coerce(cls, other):
        # Plain strings compare by tier, not alphabetically
        if isinstance(other, cls):
            return other
        if isinstance(other, str):
            try:
                return cls(other)
            except ValueError:
                raise TypeError(f"'{other}' is not an evidence tier")
        return None

    def __lt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.strength < other.strength

    def __le__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.strength <= other.strength

    def __gt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.strength > other.strength

    def __ge__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.strength >= other.strength


_TIER_STRENGTH = {
    EvidenceTier.A: 3,
    EvidenceTier.B: 2,
    EvidenceTier.C: 1,
    EvidenceTier.EXPERT_OPINION: 0,
}

HIGH_EVIDENCE_CONDITIONS: Tuple[str, ...] = (
    "myocardial infarction", "hypertension", "diabetes mellitus",
    "pneumonia", "asthma", "stroke", "migraine",
)

MODERATE_EVIDENCE_CONDITIONS: Tuple[str, ...] = (
    "angina", "gastritis", "peptic ulcer", "influenza", "arthritis",
)

HIGH_EVIDENCE_MIN_PROBABILITY = 80
MODERATE_EVIDENCE_MIN_PROBABILITY = 60
LOW_EVIDENCE_MIN_PROBABILITY = 40

# (keyword, guideline) in the order guidelines are listed
GUIDELINE_RULES: Tuple[Tuple[str, str], ...] = (
    ("hypertension", "ACC/AHA Hypertension Guidelines 2017"),
    ("diabetes", "ADA Standards of Medical Care in Diabetes 2024"),
    ("pneumonia", "IDSA/ATS Community-Acquired Pneumonia Guidelines"),
)


def _mentions_any(normalized: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword in normalized for keyword in keywords)


def classify(condition: str, probability: int) -> EvidenceTier:
    """Assign an evidence tier; the first matching rule wins."""
    normalized = normalize(condition)

    if probability >= HIGH_EVIDENCE_MIN_PROBABILITY and _mentions_any(normalized, HIGH_EVIDENCE_CONDITIONS):
        return EvidenceTier.A
    elif probability >= MODERATE_EVIDENCE_MIN_PROBABILITY and _mentions_any(normalized, MODERATE_EVIDENCE_CONDITIONS):
        return EvidenceTier.B
    elif probability >= LOW_EVIDENCE_MIN_PROBABILITY:
        return EvidenceTier.C
    else:
        return EvidenceTier.EXPERT_OPINION


def applicable_guidelines(condition: str) -> Optional[List[str]]:
    """Guidelines whose keyword appears in the condition name, None if none apply."""
    normalized = normalize(condition)
    guidelines = [guideline for keyword, guideline in GUIDELINE_RULES if keyword in normalized]
    return guidelines or None
