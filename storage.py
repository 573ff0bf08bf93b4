"""
Ephemeral diagnosis store

Purpose: keep submitted diagnosis requests and their results in memory for the lifetime of the process.

Input: validated DiagnosisInput, later the DiagnosisResponse for the same id.

Output: StoredDiagnosis records; lookups return the record or None.

Example: record = store.create(diagnosis_input); store.update(record.id, response)

Notes: nothing is persisted; restarting the server empties the store.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional
import threading
import uuid

from schemas import DiagnosisInput, DiagnosisResponse, StoredDiagnosis


class DiagnosisNotFoundError(KeyError):
    pass


class MemStorage:
    """Thread-safe in-memory store of diagnosis requests."""

    def __init__(self):
        self._records: Dict[str, StoredDiagnosis] = {}
        self._lock = threading.Lock()

    def create(self, diagnosis_input: DiagnosisInput) -> StoredDiagnosis:
        record = StoredDiagnosis(
            id=str(uuid.uuid4()),
            primary_symptom=diagnosis_input.primary_symptom,
            associated_symptoms=list(diagnosis_input.associated_symptoms),
            age=diagnosis_input.age,
            gender=diagnosis_input.gender,
            results=None,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._records[record.id] = record
        return record

    def update(self, record_id: str, results: DiagnosisResponse) -> StoredDiagnosis:
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                raise DiagnosisNotFoundError(record_id)
            updated = record.model_copy(update={"results": results})
            self._records[record_id] = updated
        return updated

    def get(self, record_id: str) -> Optional[StoredDiagnosis]:
        with self._lock:
            return self._records.get(record_id)

    def recent(self, limit: int) -> List[StoredDiagnosis]:
        """Most recent records first."""
        with self._lock:
            records = list(reversed(self._records.values()))
        # Stable sort: records created in the same instant stay newest-first
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:limit]

    def clear(self):
        with self._lock:
            self._records.clear()


storage = MemStorage()
