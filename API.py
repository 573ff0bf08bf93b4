from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

import config
from annotator import annotate_all, annotate_response
from llm_client import DiagnosisServiceError, generate_differential_diagnosis
from log import configure_logging, log_diagnosis
from schemas import AnnotationRequest, AnnotationResponse, DiagnosisInput
from storage import storage

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Differential Diagnosis API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"❌ Invalid input on {request.url.path}: {len(exc.errors())} errors")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid input data", "errors": jsonable_encoder(exc.errors())},
    )


@app.post("/api/diagnosis")
def create_diagnosis(diagnosis_input: DiagnosisInput, annotate: Optional[bool] = None):
    """
    Generate a differential diagnosis for the submitted symptoms.

    Workflow:
    1. Store the request
    2. Ask the LLM for ranked candidate conditions
    3. Annotate each candidate with ICD-10 code, citations, evidence tier and guidelines
    4. Store and return the results
    """
    logger.info(f"📝 Diagnosis request: {diagnosis_input.primary_symptom}")
    record = storage.create(diagnosis_input)

    try:
        response = generate_differential_diagnosis(diagnosis_input)
    except DiagnosisServiceError as e:
        logger.error(f"❌ Error in diagnosis endpoint: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": str(e)})

    should_annotate = config.ANNOTATE_RESULTS if annotate is None else annotate
    if should_annotate:
        response = annotate_response(response)
        logger.info(f"✅ Annotated {len(response.results)} candidates")

    record = storage.update(record.id, response)
    try:
        log_diagnosis(record)
    except OSError as e:
        logger.error(f"❌ Failed to write audit trace: {e}", exc_info=True)

    return {"id": record.id, **response.model_dump(mode="json", by_alias=True)}


@app.get("/api/diagnosis/{diagnosis_id}")
def get_diagnosis(diagnosis_id: str):
    record = storage.get(diagnosis_id)
    if record is None:
        return JSONResponse(status_code=404, content={"message": "Diagnosis not found"})
    return record.model_dump(mode="json", by_alias=True)


@app.get("/api/diagnosis")
def recent_diagnoses(limit: Optional[str] = None):
    """Most recent diagnosis requests, newest first. Invalid or non-positive limits fall back to the default."""
    try:
        count = int(limit) if limit is not None else config.RECENT_LIMIT
    except ValueError:
        count = config.RECENT_LIMIT
    if count < 1:
        count = config.RECENT_LIMIT

    return [record.model_dump(mode="json", by_alias=True) for record in storage.recent(count)]


@app.post("/api/annotate")
def annotate_candidates(request: AnnotationRequest):
    """Annotate an already generated list of candidates (no LLM call)."""
    annotated = AnnotationResponse(results=annotate_all(request.results))
    return annotated.model_dump(mode="json", by_alias=True)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "Differential Diagnosis API", "provider": config.LLM_PROVIDER}


if __name__ == "__main__":
    uvicorn.run(
        "API:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=True
    )
