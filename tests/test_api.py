import pytest
from fastapi.testclient import TestClient

import API
import config
from llm_client import DiagnosisServiceError
from schemas import DiagnosisCandidate, DiagnosisResponse
from storage import storage


def fake_response(diagnosis_input):
    return DiagnosisResponse(
        summary=f"Differential for {diagnosis_input.primary_symptom}",
        results=[
            DiagnosisCandidate(condition="Community-acquired pneumonia", probability=82, urgency="urgent",
                               matching_symptoms=["fever", "cough"], recommendations=["Chest X-ray"]),
            DiagnosisCandidate(condition="Acute bronchitis", probability=55, urgency="moderate"),
            DiagnosisCandidate(condition="Costochondritis", probability=10, urgency="mild"),
        ],
        recommendations=["Seek medical evaluation"],
        analysis_timestamp="2026-02-06T10:15:00Z",
    )


@pytest.fixture
def client(monkeypatch):
    storage.clear()
    monkeypatch.setattr(config, "AUDIT_LOG_DIR", None)
    monkeypatch.setattr(config, "ANNOTATE_RESULTS", True)
    monkeypatch.setattr(API, "generate_differential_diagnosis", fake_response)
    yield TestClient(API.app)
    storage.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_create_diagnosis_annotates_results(client):
    response = client.post("/api/diagnosis", json={"primarySymptom": "cough", "associatedSymptoms": ["fever"], "age": 40})

    assert response.status_code == 200
    body = response.json()
    assert body["id"]
    assert body["summary"] == "Differential for cough"
    assert [r["condition"] for r in body["results"]] == [
        "Community-acquired pneumonia", "Acute bronchitis", "Costochondritis",
    ]

    pneumonia, bronchitis, costochondritis = body["results"]
    assert pneumonia["classificationCode"]["code"] == "J18"
    assert pneumonia["evidenceTier"] == "A"
    assert pneumonia["guidelines"] == ["IDSA/ATS Community-Acquired Pneumonia Guidelines"]
    assert pneumonia["matchingSymptoms"] == ["fever", "cough"]
    assert len(pneumonia["citations"]) == 2
    assert bronchitis["classificationCode"]["code"] == "J40"
    assert bronchitis["citations"] == []
    assert bronchitis["evidenceTier"] == "C"
    assert costochondritis["classificationCode"] is None
    assert costochondritis["evidenceTier"] == "Expert Opinion"


def test_annotation_can_be_skipped(client):
    body = client.post("/api/diagnosis?annotate=false", json={"primarySymptom": "cough"}).json()

    assert "evidenceTier" not in body["results"][0]
    assert body["results"][0]["condition"] == "Community-acquired pneumonia"


def test_annotation_disabled_in_config(client, monkeypatch):
    monkeypatch.setattr(config, "ANNOTATE_RESULTS", False)

    body = client.post("/api/diagnosis", json={"primarySymptom": "cough"}).json()
    assert "classificationCode" not in body["results"][0]


def test_invalid_input_is_400(client):
    response = client.post("/api/diagnosis", json={"primarySymptom": "", "age": 200})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid input data"
    assert len(body["errors"]) == 2


def test_llm_failure_is_500(client, monkeypatch):
    def _fail(diagnosis_input):
        raise DiagnosisServiceError("Empty response from AI service")

    monkeypatch.setattr(API, "generate_differential_diagnosis", _fail)

    response = client.post("/api/diagnosis", json={"primarySymptom": "cough"})

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to generate differential diagnosis: Empty response from AI service"}


def test_get_diagnosis_by_id(client):
    created = client.post("/api/diagnosis", json={"primarySymptom": "cough", "gender": "female"}).json()

    response = client.get(f"/api/diagnosis/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["primarySymptom"] == "cough"
    assert body["gender"] == "female"
    assert body["results"]["results"][0]["evidenceTier"] == "A"
    assert "createdAt" in body


def test_get_unknown_diagnosis_is_404(client):
    response = client.get("/api/diagnosis/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"message": "Diagnosis not found"}


def test_recent_diagnoses(client):
    for symptom in ["cough", "fever", "headache"]:
        client.post("/api/diagnosis", json={"primarySymptom": symptom})

    assert [d["primarySymptom"] for d in client.get("/api/diagnosis?limit=2").json()] == ["headache", "fever"]
    assert len(client.get("/api/diagnosis").json()) == 3
    assert len(client.get("/api/diagnosis?limit=abc").json()) == 3
    assert len(client.get("/api/diagnosis?limit=0").json()) == 3


def test_annotate_endpoint(client):
    response = client.post("/api/annotate", json={"results": [
        {"condition": "Essential Hypertension, stage 1", "probability": 85, "urgency": "moderate",
         "explanation": "Elevated readings", "matchingSymptoms": [], "recommendations": []},
        {"condition": "Tension headache", "probability": 45, "urgency": "mild"},
    ]})

    assert response.status_code == 200
    results = response.json()["results"]
    assert [r["condition"] for r in results] == ["Essential Hypertension, stage 1", "Tension headache"]
    assert results[0]["classificationCode"]["code"] == "I10"
    assert results[0]["evidenceTier"] == "A"
    assert results[0]["guidelines"] == ["ACC/AHA Hypertension Guidelines 2017"]
    assert results[1]["classificationCode"]["code"] == "G44.2"
    assert results[1]["guidelines"] is None


def test_annotate_endpoint_rejects_blank_condition(client):
    response = client.post("/api/annotate", json={"results": [{"condition": " ", "probability": 50, "urgency": "mild"}]})
    assert response.status_code == 400


def test_audit_write_failure_still_returns_diagnosis(client, monkeypatch, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")
    monkeypatch.setattr(config, "AUDIT_LOG_DIR", str(blocker / "logs"))

    response = client.post("/api/diagnosis", json={"primarySymptom": "cough"})

    assert response.status_code == 200
    body = response.json()
    assert body["id"]
    assert client.get(f"/api/diagnosis/{body['id']}").json()["results"]["summary"] == "Differential for cough"
