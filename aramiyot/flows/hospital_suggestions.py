"""
Hospital and specialist suggestion flow
"""
from typing import Any, Optional

from ..data.catalog import hospital_directory
from ..genai.prompts import PromptDefinition
from ..models.flows import HospitalSuggestionInput, HospitalSuggestionOutput
from ..utils.logger import setup_logger
from .base import Flow

logger = setup_logger(__name__)

MAX_SUGGESTIONS = 3

NO_SUGGESTIONS_MESSAGE = (
    "I am sorry, I could not generate specific suggestions at this time. "
    "Please try rephrasing your request or consult a medical professional directly."
)

DEFAULT_ADVICE = (
    "Remember, this is general guidance. Always consult with a qualified healthcare "
    "professional for diagnosis and treatment. Check hospital and doctor availability directly."
)

HOSPITAL_SUGGESTION_TEMPLATE = """\
You are a helpful AI medical assistant. A user has described their health needs. Your goal is to provide helpful suggestions for hospital services, medical specialties, and potentially relevant doctors or hospitals.

User's Health Needs:
- Symptoms/Concerns: {{ symptoms_or_needs }}
{% if preferred_specialty %}
- Preferred Specialty: {{ preferred_specialty }}
{% endif %}
{% if location_preference %}
- Location Preference: {{ location_preference }}
{% endif %}

Available Hospital Information (Highly Simplified - assume you have a broader knowledge base):
{% for hospital in hospitals %}
- {{ hospital.name }}: Services - {{ hospital.services | join(", ") }}. Doctors - {{ hospital.doctors | join(", ") }}.
{% endfor %}

Based on the user's input and your general medical knowledge, please provide up to 3 suggestions.
For each suggestion, specify the 'serviceOrSpecialty'.
If a specific doctor from the provided list seems highly relevant, include 'suggestedDoctorName'.
If a specific hospital from the provided list is particularly suitable for the service, include 'relevantHospitalName'.
Provide a 'reason' for each suggestion, explaining how it addresses the user's needs.
Conclude with 'additionalAdvice', such as a reminder to consult a doctor for diagnosis or to check hospital availability.

Focus on matching the user's needs to appropriate services and specialties.
If location is mentioned, try to factor it in if possible, but broad matches are okay.
If symptoms are vague, suggest general consultation or an emergency room if symptoms sound urgent.
Prioritize direct matches to specialties mentioned or implied by symptoms.
"""

hospital_suggestion_prompt = PromptDefinition(
    name="hospitalSuggestionPrompt",
    template=HOSPITAL_SUGGESTION_TEMPLATE,
    input_model=HospitalSuggestionInput,
    output_model=HospitalSuggestionOutput,
    static_context={"hospitals": hospital_directory()},
)


class HospitalSuggestionFlow(Flow[HospitalSuggestionInput, HospitalSuggestionOutput]):
    """Suggests up to three services or specialists for the described needs"""

    name = "hospitalSuggestionFlow"
    prompt = hospital_suggestion_prompt

    def postprocess(self, data: Optional[Any]) -> Any:
        """
        Normalize model output

        - no output: empty suggestions with an apology
        - a single suggestion object: wrapped into a list
        - more than three suggestions: truncated
        - empty advice: general disclaimer
        """
        if data is None:
            logger.warning(f"{self.name}: model returned no output, using fallback message")
            return {"suggestions": [], "additionalAdvice": NO_SUGGESTIONS_MESSAGE}

        if not isinstance(data, dict):
            return data

        suggestions = data.get("suggestions")
        if isinstance(suggestions, dict):
            suggestions = [suggestions]
        elif not isinstance(suggestions, list):
            suggestions = []

        if len(suggestions) > MAX_SUGGESTIONS:
            logger.debug(f"{self.name}: truncating {len(suggestions)} suggestions to {MAX_SUGGESTIONS}")

        advice = data.get("additionalAdvice") or data.get("additional_advice")

        return {
            "suggestions": suggestions[:MAX_SUGGESTIONS],
            "additionalAdvice": advice or DEFAULT_ADVICE,
        }
