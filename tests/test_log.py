import json
import logging

import config
from annotator import annotate_response
from log import log_diagnosis
from schemas import DiagnosisCandidate, DiagnosisInput, DiagnosisResponse
from storage import MemStorage


def stored_record():
    store = MemStorage()
    record = store.create(DiagnosisInput(primary_symptom="wheezing"))
    response = annotate_response(DiagnosisResponse(
        summary="Reactive airway disease likely",
        results=[DiagnosisCandidate(condition="Asthma", probability=85, urgency="moderate")],
    ))
    return store.update(record.id, response)


def test_audit_line_is_logged(caplog, monkeypatch):
    monkeypatch.setattr(config, "AUDIT_LOG_DIR", None)
    record = stored_record()

    with caplog.at_level(logging.INFO, logger="audit"):
        path = log_diagnosis(record, audit_dir=None)

    assert path is None
    assert record.id in caplog.text
    assert '"code": "J45"' in caplog.text
    assert '"evidenceTier": "A"' in caplog.text


def test_audit_trace_file(tmp_path):
    record = stored_record()

    path = log_diagnosis(record, audit_dir=str(tmp_path / "logs"))

    assert path.exists()
    assert path.name.startswith("diagnosis_") and path.name.endswith(f"_{record.id}.json")
    trace = json.loads(path.read_text(encoding="utf-8"))
    assert trace["primarySymptom"] == "wheezing"
    assert trace["results"]["results"][0]["classificationCode"]["code"] == "J45"
