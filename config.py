"""
Central configuration

Purpose: single source of truth for API keys, model names, endpoints, thresholds and default params.

Input: none at runtime (read constants / environment variables, optionally from a .env file).

Output: variables used by other modules (strings, numbers, booleans).

Example: LLM_PROVIDER=openai OPENAI_API_KEY=sk-... uvicorn API:app
"""
import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# LLM provider: "gemini" or "openai" (any OpenAI-compatible chat completions endpoint)
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").lower()

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_ENDPOINT = os.getenv("GEMINI_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_ENDPOINT = os.getenv("OPENAI_ENDPOINT", "https://api.openai.com/v1/chat/completions")

LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.3"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "2000"))
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))  # seconds

# Attach ICD-10 codes, citations, evidence tiers and guidelines to LLM results
ANNOTATE_RESULTS = _env_bool("ANNOTATE_RESULTS", True)

RECENT_LIMIT = 10

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
AUDIT_LOG_DIR = os.getenv("AUDIT_LOG_DIR")  # unset -> audit traces go to the log only

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
