"""
AI flows for Aramiyot

Each flow validates its input, renders a Jinja2 prompt, calls the
generative backend and validates the output against a pydantic model.
"""
from typing import Any, AsyncIterator, Dict, Union

from ..genai.client import GenerativeClient
from ..models.flows import (
    ChatFlowInput, ChatFlowOutput,
    RecommendationInput, RecommendationOutput,
    HospitalSuggestionInput, HospitalSuggestionOutput
)
from .base import Flow
from .chat import ChatFlow
from .recommendations import RecommendationFlow
from .hospital_suggestions import (
    HospitalSuggestionFlow, NO_SUGGESTIONS_MESSAGE, DEFAULT_ADVICE, MAX_SUGGESTIONS
)


class Flows:
    """The application's flows, bound to one generative client"""

    def __init__(self, client: GenerativeClient):
        self.client = client
        self.chat = ChatFlow(client)
        self.recommendations = RecommendationFlow(client)
        self.hospital_suggestions = HospitalSuggestionFlow(client)

    async def run_chat_flow(self, flow_input: Union[ChatFlowInput, Dict[str, Any]]) -> ChatFlowOutput:
        return await self.chat.run(flow_input)

    def stream_chat_flow(self, flow_input: Union[ChatFlowInput, Dict[str, Any]]) -> AsyncIterator[str]:
        return self.chat.stream(flow_input)

    async def run_recommendation_flow(
        self, flow_input: Union[RecommendationInput, Dict[str, Any]]
    ) -> RecommendationOutput:
        return await self.recommendations.run(flow_input)

    async def run_hospital_suggestion_flow(
        self, flow_input: Union[HospitalSuggestionInput, Dict[str, Any]]
    ) -> HospitalSuggestionOutput:
        return await self.hospital_suggestions.run(flow_input)


__all__ = [
    'Flow',
    'Flows',
    'ChatFlow',
    'RecommendationFlow',
    'HospitalSuggestionFlow',
    'NO_SUGGESTIONS_MESSAGE',
    'DEFAULT_ADVICE',
    'MAX_SUGGESTIONS'
]
