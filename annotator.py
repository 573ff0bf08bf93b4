"""
Medical reference annotation

Purpose: attach an ICD-10 code, textbook citations, an evidence tier and applicable guidelines to each
condition the LLM suggested, without altering the LLM's own judgments.

Input: DiagnosisCandidate (or a list of them, or a whole DiagnosisResponse).

Output: AnnotatedDiagnosis with the candidate's fields unchanged plus the four annotations.

Example: annotate(DiagnosisCandidate(condition="Community-acquired pneumonia", probability=82, ...))
-> code J18, Harrison's + Park's citations, tier A, IDSA/ATS guideline.

Notes: pure and synchronous over static tables, so it never raises for a validated candidate and is
safe to call from any thread. Input validation is the caller's job (see schemas.DiagnosisCandidate).
"""
from typing import Iterable, List

from normalizer import resolve, resolve_citations
from rules_engine import applicable_guidelines, classify
from schemas import AnnotatedDiagnosis, DiagnosisCandidate, DiagnosisResponse


def annotate(candidate: DiagnosisCandidate) -> AnnotatedDiagnosis:
    """Annotate a single diagnosis candidate."""
    return AnnotatedDiagnosis(
        **candidate.model_dump(include=set(DiagnosisCandidate.model_fields)),
        classification_code=resolve(candidate.condition),
        citations=resolve_citations(candidate.condition),
        evidence_tier=classify(candidate.condition, candidate.probability),
        guidelines=applicable_guidelines(candidate.condition),
    )


def annotate_all(candidates: Iterable[DiagnosisCandidate]) -> List[AnnotatedDiagnosis]:
    """Annotate every candidate, keeping order and count."""
    return [annotate(candidate) for candidate in candidates]


def annotate_response(response: DiagnosisResponse) -> DiagnosisResponse:
    """Copy of the response with annotated results; summary and recommendations are untouched."""
    return response.model_copy(update={"results": annotate_all(response.results)})
