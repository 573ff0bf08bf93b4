"""
Static medical reference tables

Purpose: curated ICD-10 codes and textbook citations for frequently suggested conditions.

Input: none (compiled-in data, built once at import).

Output: ordered (key, value) tables plus read-only mappings keyed by normalized condition name
(lower-cased, trimmed).

Example: ICD10_CODES["asthma"] -> ClassificationCode(code="J45", description="Asthma", category="Respiratory")

Notes: coverage is partial on purpose; most condition names have no entry. The declaration order of
the tables is the order the matcher scans them in, so do not sort them.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ClassificationCode:
    """ICD-10 classification for a condition."""
    code: str
    description: str
    category: str


@dataclass(frozen=True)
class Citation:
    """Reference to a textbook chapter."""
    source: str
    locator: str
    edition: Optional[str] = None


# ============================================
# ICD-10 CODES
# ============================================

ICD10_ENTRIES: Tuple[Tuple[str, ClassificationCode], ...] = (
    # Cardiovascular
    ("myocardial infarction", ClassificationCode("I21", "Acute myocardial infarction", "Cardiovascular")),
    ("angina", ClassificationCode("I20", "Angina pectoris", "Cardiovascular")),
    ("hypertension", ClassificationCode("I10", "Essential hypertension", "Cardiovascular")),
    ("heart failure", ClassificationCode("I50", "Heart failure", "Cardiovascular")),
    ("atrial fibrillation", ClassificationCode("I48", "Atrial fibrillation and flutter", "Cardiovascular")),

    # Respiratory
    ("pneumonia", ClassificationCode("J18", "Pneumonia, unspecified organism", "Respiratory")),
    ("asthma", ClassificationCode("J45", "Asthma", "Respiratory")),
    ("copd", ClassificationCode("J44", "Chronic obstructive pulmonary disease", "Respiratory")),
    ("bronchitis", ClassificationCode("J40", "Bronchitis, not specified as acute or chronic", "Respiratory")),

    # Gastrointestinal
    ("gastritis", ClassificationCode("K29", "Gastritis and duodenitis", "Gastrointestinal")),
    ("peptic ulcer", ClassificationCode("K27", "Peptic ulcer, site unspecified", "Gastrointestinal")),
    ("gastroenteritis", ClassificationCode("K59.1", "Gastroenteritis and colitis", "Gastrointestinal")),
    ("appendicitis", ClassificationCode("K37", "Unspecified appendicitis", "Gastrointestinal")),

    # Neurological
    ("migraine", ClassificationCode("G43", "Migraine", "Neurological")),
    ("tension headache", ClassificationCode("G44.2", "Tension-type headache", "Neurological")),
    ("seizure", ClassificationCode("G40", "Epilepsy", "Neurological")),
    ("stroke", ClassificationCode("I64", "Stroke, not specified", "Neurological")),

    # Endocrine
    ("diabetes mellitus", ClassificationCode("E11", "Type 2 diabetes mellitus", "Endocrine")),
    ("hyperthyroidism", ClassificationCode("E05", "Thyrotoxicosis", "Endocrine")),
    ("hypothyroidism", ClassificationCode("E03", "Other hypothyroidism", "Endocrine")),

    # Infectious
    ("influenza", ClassificationCode("J11", "Influenza due to unidentified influenza virus", "Infectious")),
    ("cellulitis", ClassificationCode("L03", "Cellulitis and acute lymphangitis", "Infectious")),
    ("urinary tract infection", ClassificationCode("N39.0", "Urinary tract infection", "Infectious")),

    # Musculoskeletal
    ("arthritis", ClassificationCode("M19", "Other and unspecified osteoarthritis", "Musculoskeletal")),
    ("back pain", ClassificationCode("M54.9", "Dorsalgia, unspecified", "Musculoskeletal")),
    ("fibromyalgia", ClassificationCode("M79.3", "Panniculitis, unspecified", "Musculoskeletal")),
)


# ============================================
# TEXTBOOK CITATIONS
# ============================================

HARRISON = "Harrison's Principles of Internal Medicine"
BRAUNWALD = "Braunwald's Heart Disease"
PARK = "Park's Textbook of Preventive and Social Medicine"
SLEISENGER = "Sleisenger and Fordtran's Gastrointestinal Disease"
ADAMS_VICTOR = "Adams and Victor's Neurology"

CITATION_ENTRIES: Tuple[Tuple[str, Tuple[Citation, ...]], ...] = (
    # Cardiovascular
    ("myocardial infarction", (
        Citation(HARRISON, "Chapter 295: ST-Elevation Myocardial Infarction", "21st"),
        Citation(BRAUNWALD, "Chapter 60: STEMI", "12th"),
    )),
    ("angina", (
        Citation(HARRISON, "Chapter 293: Ischemic Heart Disease", "21st"),
        Citation(BRAUNWALD, "Chapter 59: Stable Ischemic Heart Disease", "12th"),
    )),
    ("hypertension", (
        Citation(HARRISON, "Chapter 298: Hypertensive Vascular Disease", "21st"),
        Citation(PARK, "Chapter 6: Epidemiology of Chronic Diseases", "25th"),
    )),

    # Respiratory
    ("pneumonia", (
        Citation(HARRISON, "Chapter 149: Pneumonia", "21st"),
        Citation(PARK, "Chapter 4: Epidemiology of Communicable Diseases", "25th"),
    )),
    ("asthma", (
        Citation(HARRISON, "Chapter 281: Asthma", "21st"),
        Citation(PARK, "Chapter 6: Epidemiology of Chronic Diseases", "25th"),
    )),

    # Gastrointestinal
    ("gastritis", (
        Citation(HARRISON, "Chapter 317: Peptic Ulcer Disease", "21st"),
        Citation(SLEISENGER, "Chapter 52: Gastritis", "11th"),
    )),
    ("peptic ulcer", (
        Citation(HARRISON, "Chapter 317: Peptic Ulcer Disease", "21st"),
        Citation(SLEISENGER, "Chapter 53: Peptic Ulcer Disease", "11th"),
    )),

    # Neurological
    ("migraine", (
        Citation(HARRISON, "Chapter 422: Migraine", "21st"),
        Citation(ADAMS_VICTOR, "Chapter 10: Headache", "12th"),
    )),
    ("stroke", (
        Citation(HARRISON, "Chapter 419: Cerebrovascular Diseases", "21st"),
        Citation(ADAMS_VICTOR, "Chapter 34: Cerebrovascular Disease", "12th"),
    )),

    # Endocrine
    ("diabetes mellitus", (
        Citation(HARRISON, "Chapter 396: Diabetes Mellitus", "21st"),
        Citation(PARK, "Chapter 6: Epidemiology of Chronic Diseases", "25th"),
    )),

    # Infectious
    ("influenza", (
        Citation(HARRISON, "Chapter 195: Influenza", "21st"),
        Citation(PARK, "Chapter 4: Epidemiology of Communicable Diseases", "25th"),
    )),
)


# Read-only views for exact-key lookup
ICD10_CODES: Mapping[str, ClassificationCode] = MappingProxyType(dict(ICD10_ENTRIES))
MEDICAL_TEXTBOOKS: Mapping[str, Tuple[Citation, ...]] = MappingProxyType(dict(CITATION_ENTRIES))
