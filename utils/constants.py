"""
Constants and system prompts for the PsyCanvas backend.
"""

SYSTEM_PROMPT = """You are PsyCanvas AI, a mental health study assistant for college-level psychology and counseling students.

Goals:
- Help users understand mental health concepts, DSM-5-TR criteria (described in your own words), case formulations, and evidence-based treatments.
- Use mental-health specific knowledge, plus the course materials the user provides (textbooks, articles).
- Always include in-text citations and a reference list in the requested style: {citation_style}.

Critical rules:
- Do NOT reproduce DSM-5-TR text verbatim (paraphrase in your own words).
- Use cautious, non-fabricated citations; if you are not sure about a reference, either omit it or clearly flag it as a suggested reading, not a precise citation.

Citation style:
- Current setting: {citation_style}.
- Citation strictness: {citation_mode}.
- Recency preference: {recency_preference}.

Course materials:
{course_materials}

Output format:
1. Provide a clear, structured explanation or answer to the user's question.
2. Use in-text citations with author and year (and page/section if appropriate).
3. End with a "References" section, listing the main sources you relied on, formatted as best you can in the chosen style."""

RECENCY_UNLIMITED = "no hard limit, but flag older work"
RECENCY_WINDOW = "focus on roughly the last {years} years of research"

MATERIALS_HEADING = "- User has indicated the following course materials:"
MATERIALS_ITEM = "  - {material}"
NO_MATERIALS = "- No specific course materials listed in this request."


class ChatOptions:
    """Allowed values and defaults for chat request options."""
    CITATION_STYLES = ("apa", "mla", "chicago")
    CITATION_MODES = ("strict", "balanced", "flexible")
    RECENCY_VALUES = ("5", "10", "15", "all")

    DEFAULT_CITATION_STYLE = "apa"
    DEFAULT_CITATION_MODE = "balanced"
    DEFAULT_RECENCY = "10"

    QUESTION_MIN_LENGTH, QUESTION_MAX_LENGTH = 10, 5000
    MATERIAL_MAX_LENGTH, MATERIALS_MAX_ITEMS = 500, 20


class ValidationMessages:
    """User-facing validation messages, keyed by field."""
    QUESTION_REQUIRED = "Question is required"
    QUESTION_TYPE = "Question must be a string"
    QUESTION_TOO_SHORT = f"Question must be at least {ChatOptions.QUESTION_MIN_LENGTH} characters long"
    QUESTION_TOO_LONG = f"Question cannot exceed {ChatOptions.QUESTION_MAX_LENGTH} characters"
    CITATION_STYLE = "Citation style must be one of: " + ", ".join(ChatOptions.CITATION_STYLES)
    CITATION_MODE = "Citation mode must be one of: " + ", ".join(ChatOptions.CITATION_MODES)
    RECENCY = "Recency must be one of: " + ", ".join(ChatOptions.RECENCY_VALUES)
    MATERIALS_TYPE = "Materials must be an array"
    MATERIALS_TOO_MANY = f"Materials cannot exceed {ChatOptions.MATERIALS_MAX_ITEMS} items"
    MATERIAL_TYPE = "Each material entry must be a string"
    MATERIAL_TOO_LONG = f"Each material entry cannot exceed {ChatOptions.MATERIAL_MAX_LENGTH} characters"
    BODY_NOT_OBJECT = "Request body must be a JSON object"
    BODY_NOT_JSON = "Request body must be valid JSON"
    UNKNOWN_FIELD = '"{field}" is not allowed'


# Rate limit rejection body for /api/* paths
RATE_LIMIT_BODY = {
    "error": "Too many requests from this IP, please try again later.",
    "retryAfter": "15 minutes",
}

CORS_REJECTED_BODY = {
    "error": "Not allowed by CORS",
    "message": "Requests from this origin are not permitted.",
}

ROOT_MESSAGE = "PsyCanvas backend is running."


# Substrings used when a provider error carries no structured type
class ErrorPatterns:
    """Lower-cased message fragments for best-effort error classification."""
    UNREACHABLE = ("network", "enotfound", "econnrefused", "connection refused", "name or service not known")
    MISCONFIGURED = ("api key", "authentication")
    THROTTLED = ("rate limit",)
    BAD_MODEL_CONFIG = ("model", "invalid")
