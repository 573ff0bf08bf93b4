"""
Request / response models

Purpose: validate what the form posts and what the LLM returns, and shape the JSON sent back to the UI.

Notes: attributes are snake_case; JSON uses camelCase aliases (primarySymptom, matchingSymptoms,
analysisTimestamp, ...). Serialize with model_dump(by_alias=True).
"""
from datetime import datetime
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from reference_catalog import Citation, ClassificationCode
from rules_engine import EvidenceTier


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DiagnosisInput(CamelModel):
    """Symptoms submitted through the form."""
    primary_symptom: str = Field(min_length=1)
    associated_symptoms: List[str] = []
    age: Optional[int] = Field(default=None, ge=1, le=120)
    gender: Optional[Literal["male", "female", "other"]] = None


class DiagnosisCandidate(CamelModel):
    """One ranked condition from the LLM's differential diagnosis."""
    condition: str
    probability: int = Field(ge=0, le=100)
    explanation: str = ""
    urgency: Literal["urgent", "moderate", "mild"]
    matching_symptoms: List[str] = []
    recommendations: List[str] = []

    @field_validator("condition")
    @classmethod
    def condition_not_blank(cls, value: str) -> str:
        # A blank name would substring-match every catalog key
        if not value.strip():
            raise ValueError("condition must not be blank")
        return value


class AnnotatedDiagnosis(DiagnosisCandidate):
    """A candidate plus its reference lookup. Candidate fields are carried over unchanged."""
    classification_code: Optional[ClassificationCode] = None
    citations: Tuple[Citation, ...] = ()
    evidence_tier: EvidenceTier
    guidelines: Optional[List[str]] = None


class DiagnosisResponse(CamelModel):
    summary: str = Field(min_length=1)
    results: List[Union[AnnotatedDiagnosis, DiagnosisCandidate]]
    recommendations: List[str] = []
    analysis_timestamp: str = ""


class AnnotationRequest(CamelModel):
    results: List[DiagnosisCandidate]


class AnnotationResponse(CamelModel):
    results: List[AnnotatedDiagnosis]


class StoredDiagnosis(CamelModel):
    """Ephemeral record of one diagnosis request."""
    id: str
    primary_symptom: str
    associated_symptoms: List[str] = []
    age: Optional[int] = None
    gender: Optional[str] = None
    results: Optional[DiagnosisResponse] = None
    created_at: datetime
