"""
Logging & audit utilities

Purpose: configure process logging and persist request/response traces for clinician review.

Input: stored diagnosis record (input symptoms + annotated results).

Output: one audit log line per request and, when AUDIT_LOG_DIR is set, a JSON trace file.

Example: creates logs/diagnosis_20260206T101500_<id>.json.
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import json
import logging

import config
from schemas import StoredDiagnosis

audit_logger = logging.getLogger("audit")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | [%(name)s] | %(message)s"


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def log_diagnosis(record: StoredDiagnosis, audit_dir: Optional[str] = None) -> Optional[Path]:
    """
    Record an audit trace of a completed diagnosis request.

    Args:
        record: Stored request with its results
        audit_dir: Directory for JSON traces (defaults to config.AUDIT_LOG_DIR)

    Returns:
        Path of the written trace file, or None if only logged
    """
    results = record.results.results if record.results else []
    matched = [
        {
            "condition": r.condition,
            "probability": r.probability,
            "code": getattr(getattr(r, "classification_code", None), "code", None),
            "evidenceTier": getattr(getattr(r, "evidence_tier", None), "value", None),
        }
        for r in results
    ]
    audit_logger.info(
        "diagnosis %s: symptom=%r results=%d matched=%s",
        record.id, record.primary_symptom, len(results), json.dumps(matched),
    )

    audit_dir = audit_dir or config.AUDIT_LOG_DIR
    if not audit_dir:
        return None

    directory = Path(audit_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    path = directory / f"diagnosis_{stamp}_{record.id}.json"
    path.write_text(record.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    return path
