"""
Create the differential diagnosis prompt

Purpose: format the patient presentation and the expected JSON shape into a prompt for the LLM.

Input: DiagnosisInput (primary symptom, associated symptoms, optional age / gender).

Output: prompt_text: str ready to send to the LLM, plus a short system instruction.

Example: returns a prompt beginning "You are an expert medical AI assistant specializing in differential
diagnosis..." followed by "Patient Presentation:" and "- Primary Symptom: chest pain".
"""
from datetime import datetime, timezone
from typing import Optional

from schemas import DiagnosisInput

SYSTEM_INSTRUCTION = (
    "You are a medical AI specialist providing differential diagnosis assistance. "
    "Always respond with valid JSON only and maintain professional medical standards."
)

RESPONSE_FORMAT = """{
  "summary": "Brief analysis summary explaining the approach and key considerations",
  "results": [
    {
      "condition": "Medical condition name",
      "probability": 85,
      "explanation": "Clear explanation of why this condition fits the symptoms",
      "urgency": "urgent|moderate|mild",
      "matchingSymptoms": ["symptom1", "symptom2"],
      "recommendations": ["specific recommendation 1", "specific recommendation 2"]
    }
  ],
  "recommendations": ["Overall recommendations for next steps", "General advice"],
  "analysisTimestamp": "%s"
}"""

GUIDELINES = """Guidelines:
- Provide 3-6 differential diagnoses ranked by likelihood
- Include probability percentages (0-100)
- Consider red flag symptoms that require urgent attention
- Provide specific, actionable recommendations
- Use proper medical terminology but explain clearly
- Consider age and gender when relevant to the diagnosis
- Mark urgent conditions that require immediate medical attention
- Focus on the most likely conditions based on symptom correlation"""


def _demographics(diagnosis_input: DiagnosisInput) -> str:
    parts = []
    if diagnosis_input.age:
        parts.append(f"Age: {diagnosis_input.age}")
    if diagnosis_input.gender:
        parts.append(f"Gender: {diagnosis_input.gender}")
    return ", ".join(parts)


def build_prompt(diagnosis_input: DiagnosisInput, timestamp: Optional[str] = None) -> str:
    """
    Build the user prompt for a differential diagnosis request.

    Args:
        diagnosis_input: Validated form input
        timestamp: ISO timestamp to echo back as analysisTimestamp (defaults to now, UTC)

    Returns:
        Prompt text
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc).isoformat()

    presentation = [f"- Primary Symptom: {diagnosis_input.primary_symptom}"]
    if diagnosis_input.associated_symptoms:
        presentation.append(f"- Associated Symptoms: {', '.join(diagnosis_input.associated_symptoms)}")
    demographics = _demographics(diagnosis_input)
    if demographics:
        presentation.append(f"- Patient Demographics: {demographics}")

    return "\n".join([
        "You are an expert medical AI assistant specializing in differential diagnosis. "
        "Analyze the following patient presentation and provide a ranked list of potential diagnoses.",
        "",
        "Patient Presentation:",
        *presentation,
        "",
        "Please provide your analysis in the following JSON format:",
        RESPONSE_FORMAT % timestamp,
        "",
        GUIDELINES,
        "",
        "Remember: This is for educational purposes only and should not replace professional medical evaluation.",
    ])
