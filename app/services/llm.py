import logging
import os

from google import genai

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-2.0-flash"

MISSING_KEY_MESSAGE = "API Key is missing."
FAILURE_MESSAGE = "Error generating report."


def build_summary_prompt(student_name: str, report: str) -> str:
    return f"""
        You are an IEP assistant writing a short (max 150 words) progress narrative for {student_name}'s
        progress report. Use only the facts in the report below. Use gender-neutral language.
        Mention which objectives were met, which are improving and which need attention.
        Keep it factual but positive.

        Report:
        {report}
    """


def generate_progress_summary(student_name: str, report: str) -> str:
    """Ask Gemini for a narrative summary of a generated report.

    Never raises: a missing key or a failed call returns a fixed message the
    front end shows in place of the narrative.
    """
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        return MISSING_KEY_MESSAGE

    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=os.getenv("GEMINI_MODEL_NAME", DEFAULT_MODEL_NAME),
            contents=build_summary_prompt(student_name, report),
        )
        return (response.text or "").strip() or "Could not generate report."
    except Exception as e:
        logger.error(f"Gemini summarization error: {e}")
        return FAILURE_MESSAGE
