"""
Personalized wellness recommendations flow
"""
from ..genai.prompts import PromptDefinition
from ..models.flows import RecommendationInput, RecommendationOutput
from .base import Flow

RECOMMENDATIONS_TEMPLATE = """\
You are a wellness expert. Based on the user's past activity and preferences, provide personalized recommendations for wellness resources.

User Activity and Preferences: {{ user_activity }}

Recommendations:
"""

recommendations_prompt = PromptDefinition(
    name="personalizedRecommendationsPrompt",
    template=RECOMMENDATIONS_TEMPLATE,
    input_model=RecommendationInput,
    output_model=RecommendationOutput,
)


class RecommendationFlow(Flow[RecommendationInput, RecommendationOutput]):
    """Returns however many recommendations the model produced; callers cap for display"""

    name = "personalizedRecommendationsFlow"
    prompt = recommendations_prompt
