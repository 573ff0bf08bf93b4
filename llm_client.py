"""
LLM CLIENT - DIFFERENTIAL DIAGNOSIS GENERATION
Sends the patient presentation to the configured LLM provider and turns its JSON answer into a
validated DiagnosisResponse.

Providers:
- gemini: Google Generative Language REST API (generateContent, JSON response mime type)
- openai: any OpenAI-compatible chat completions endpoint (json_object response format)

Purpose:
- Build the prompt
- Call the provider over HTTP
- Parse and validate the JSON answer
- Raise DiagnosisServiceError on any failure so the API can report it
"""
from typing import Any, Dict, Optional
import json
import logging

import requests
from pydantic import ValidationError

import config
from prompt_builder import SYSTEM_INSTRUCTION, build_prompt
from schemas import DiagnosisInput, DiagnosisResponse

logger = logging.getLogger(__name__)


class DiagnosisServiceError(Exception):
    """The LLM could not produce a usable differential diagnosis."""

    def __init__(self, message: str):
        super().__init__(f"Failed to generate differential diagnosis: {message}")


# ═════════════════════════════════════════════════════════════
# PROVIDER CALLS
# ═════════════════════════════════════════════════════════════

def _call_gemini(prompt: str) -> str:
    if not config.GEMINI_API_KEY:
        raise DiagnosisServiceError("GEMINI_API_KEY environment variable is not set")

    url = f"{config.GEMINI_ENDPOINT}/models/{config.GEMINI_MODEL}:generateContent"
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": config.GEMINI_API_KEY,
    }
    payload = {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "temperature": config.LLM_TEMPERATURE,
            "maxOutputTokens": config.LLM_MAX_TOKENS,
        },
    }

    response = requests.post(url, json=payload, headers=headers, timeout=config.LLM_TIMEOUT)
    response.raise_for_status()
    data = response.json()

    try:
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)
    except (KeyError, IndexError, TypeError, AttributeError):
        raise DiagnosisServiceError("Empty response from Gemini model")


def _call_openai(prompt: str) -> str:
    if not config.OPENAI_API_KEY:
        raise DiagnosisServiceError("OPENAI_API_KEY environment variable is not set")

    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {config.OPENAI_API_KEY}",
    }
    payload = {
        "model": config.OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": prompt},
        ],
        "response_format": {"type": "json_object"},
        "temperature": config.LLM_TEMPERATURE,
        "max_tokens": config.LLM_MAX_TOKENS,
    }

    response = requests.post(config.OPENAI_ENDPOINT, json=payload, headers=headers, timeout=config.LLM_TIMEOUT)
    response.raise_for_status()
    data = response.json()

    try:
        return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError):
        raise DiagnosisServiceError("Empty response from OpenAI model")


PROVIDERS = {
    "gemini": _call_gemini,
    "openai": _call_openai,
}


# ═════════════════════════════════════════════════════════════
# RESPONSE PARSING
# ═════════════════════════════════════════════════════════════

def parse_diagnosis_response(raw_text: str) -> DiagnosisResponse:
    """
    Parse the raw LLM text into a DiagnosisResponse.

    Raises:
        DiagnosisServiceError: empty text, invalid JSON, or a response without summary/results
    """
    if not raw_text or not raw_text.strip():
        raise DiagnosisServiceError("Empty response from AI service")

    try:
        result: Dict[str, Any] = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise DiagnosisServiceError(f"AI service returned invalid JSON ({e})")

    if not isinstance(result, dict) or not result.get("summary") or not isinstance(result.get("results"), list):
        raise DiagnosisServiceError("Invalid response format from AI service")

    try:
        return DiagnosisResponse.model_validate(result)
    except ValidationError as e:
        raise DiagnosisServiceError(f"Invalid response format from AI service ({e.error_count()} errors)")


# ═════════════════════════════════════════════════════════════
# MAIN ENTRY POINT
# ═════════════════════════════════════════════════════════════

def generate_differential_diagnosis(
    diagnosis_input: DiagnosisInput,
    provider: Optional[str] = None,
) -> DiagnosisResponse:
    """
    Ask the LLM for a ranked differential diagnosis.

    Args:
        diagnosis_input: Validated form input
        provider: "gemini" or "openai" (defaults to config.LLM_PROVIDER)

    Returns:
        Validated DiagnosisResponse (results are not annotated)
    """
    provider = (provider or config.LLM_PROVIDER).lower()
    call = PROVIDERS.get(provider)
    if call is None:
        raise DiagnosisServiceError(f"Unknown LLM provider '{provider}'")

    prompt = build_prompt(diagnosis_input)
    logger.info(f"Requesting differential diagnosis from {provider} for '{diagnosis_input.primary_symptom}'")

    try:
        raw_text = call(prompt)
    except requests.exceptions.RequestException as e:
        logger.error(f"LLM request to {provider} failed: {e}", exc_info=True)
        raise DiagnosisServiceError(f"LLM request failed ({type(e).__name__})") from e

    result = parse_diagnosis_response(raw_text)
    logger.info(f"Received {len(result.results)} candidate diagnoses")
    return result
