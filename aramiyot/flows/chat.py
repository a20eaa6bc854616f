"""
Health inquiry chatbot flow
"""
from ..genai.prompts import PromptDefinition
from ..models.flows import ChatFlowInput, ChatFlowOutput
from .base import Flow

CHAT_TEMPLATE = """\
You are a helpful AI-powered chatbot that answers general health inquiries and provides basic guidance.
Please remember to only provide general guidance and always recommend consulting with a healthcare professional for specific medical advice.

{% if photo_data_uri %}
The user has attached an image related to their inquiry. Consider this image when formulating your response:
{{ media(photo_data_uri) }}
{% endif %}

User Inquiry: {{ inquiry }}
"""

chat_prompt = PromptDefinition(
    name="aiHealthChatbotPrompt",
    template=CHAT_TEMPLATE,
    input_model=ChatFlowInput,
    output_model=ChatFlowOutput,
    text_output_field="response",
)


class ChatFlow(Flow[ChatFlowInput, ChatFlowOutput]):
    """Answers general health inquiries; the same prompt backs the streaming endpoint"""

    name = "aiHealthChatbotFlow"
    prompt = chat_prompt
