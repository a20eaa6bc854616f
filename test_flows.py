"""
Flow layer tests against the stub generative backend
"""
import asyncio

import pytest

from aramiyot.errors import FlowInputError, FlowOutputError, GenerationError
from aramiyot.flows import Flows, NO_SUGGESTIONS_MESSAGE, DEFAULT_ADVICE
from aramiyot.genai import StubGenerativeClient


def _suggestion(name):
    return {"serviceOrSpecialty": name, "reason": f"Because of {name}"}


async def _collect(stream):
    return [chunk async for chunk in stream]


def test_chat_flow_wraps_text_response():
    stub = StubGenerativeClient({"aiHealthChatbotPrompt": "Drink plenty of water."})
    result = asyncio.run(Flows(stub).run_chat_flow({"inquiry": "I feel dizzy"}))

    assert result.response == "Drink plenty of water."
    prompt = stub.calls[-1]
    assert prompt.response_schema is None
    assert "User Inquiry: I feel dizzy" in prompt.text
    assert "attached an image" not in prompt.text


def test_streamed_chunks_concatenate_to_full_response():
    chunks = ["Rest ", "and ", "hydrate", "."]
    flows = Flows(StubGenerativeClient({"aiHealthChatbotPrompt": chunks}))

    streamed = asyncio.run(_collect(flows.stream_chat_flow({"inquiry": "headache"})))
    complete = asyncio.run(flows.run_chat_flow({"inquiry": "headache"}))

    assert streamed == chunks
    assert "".join(streamed) == complete.response


def test_chat_flow_attaches_photo_as_inline_media():
    stub = StubGenerativeClient({"aiHealthChatbotPrompt": "Looks like a mild rash."})
    flow_input = {"inquiry": "What is this?", "photoDataUri": "data:image/png;base64,iVBORw0KGgo="}

    asyncio.run(Flows(stub).run_chat_flow(flow_input))

    prompt = stub.calls[-1]
    assert "attached an image" in prompt.text
    assert len(prompt.media) == 1
    assert prompt.media[0].mime_type == "image/png"
    assert prompt.media[0].data == "iVBORw0KGgo="


@pytest.mark.parametrize("flow_input, field", [
    ({}, "inquiry"),
    ({"inquiry": ""}, "inquiry"),
    ({"inquiry": 42}, "inquiry"),
    ({"inquiry": "ok", "photoDataUri": 7}, "photoDataUri"),
])
def test_chat_flow_rejects_invalid_input(flow_input, field):
    stub = StubGenerativeClient()
    with pytest.raises(FlowInputError) as exc_info:
        asyncio.run(Flows(stub).run_chat_flow(flow_input))

    assert field in exc_info.value.details["fieldErrors"]
    assert stub.calls == []


def test_chat_flow_without_output_fails():
    flows = Flows(StubGenerativeClient({"aiHealthChatbotPrompt": None}))
    with pytest.raises(FlowOutputError):
        asyncio.run(flows.run_chat_flow({"inquiry": "hello"}))


def test_backend_errors_propagate():
    flows = Flows(StubGenerativeClient({"aiHealthChatbotPrompt": GenerationError("quota exceeded", 429)}))
    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(flows.run_chat_flow({"inquiry": "hello"}))
    assert exc_info.value.status_code == 429


def test_recommendation_flow_requests_structured_output():
    recommendations = ["Try box breathing", "Walk after lunch", "Stretch before bed", "Journal nightly"]
    stub = StubGenerativeClient({"personalizedRecommendationsPrompt": {"recommendations": recommendations}})

    result = asyncio.run(Flows(stub).run_recommendation_flow({"userActivity": "Reads about sleep"}))

    assert result.recommendations == recommendations
    schema = stub.calls[-1].response_schema
    assert schema["type"] == "OBJECT"
    assert schema["properties"]["recommendations"]["type"] == "ARRAY"
    assert schema["properties"]["recommendations"]["items"]["type"] == "STRING"


def test_recommendation_flow_rejects_non_json_output():
    flows = Flows(StubGenerativeClient({"personalizedRecommendationsPrompt": "just some prose"}))
    with pytest.raises(FlowOutputError):
        asyncio.run(flows.run_recommendation_flow({"userActivity": "yoga"}))


def test_recommendation_flow_rejects_wrong_shape():
    flows = Flows(StubGenerativeClient({"personalizedRecommendationsPrompt": {"recommendations": "not a list"}}))
    with pytest.raises(FlowOutputError):
        asyncio.run(flows.run_recommendation_flow({"userActivity": "yoga"}))


def test_hospital_suggestions_fallback_when_model_returns_nothing():
    flows = Flows(StubGenerativeClient({"hospitalSuggestionPrompt": None}))
    result = asyncio.run(flows.run_hospital_suggestion_flow({"symptomsOrNeeds": "knee pain"}))

    assert result.suggestions == []
    assert result.additional_advice == NO_SUGGESTIONS_MESSAGE
    assert result.additional_advice.startswith("I am sorry, I could not generate specific suggestions")


def test_hospital_suggestions_empty_object_gets_default_advice():
    flows = Flows(StubGenerativeClient({"hospitalSuggestionPrompt": {}}))
    result = asyncio.run(flows.run_hospital_suggestion_flow({"symptomsOrNeeds": "knee pain"}))

    assert result.suggestions == []
    assert result.additional_advice == DEFAULT_ADVICE


def test_hospital_suggestions_truncated_to_three():
    suggestions = [_suggestion(name) for name in ("Orthopedics", "Rheumatology", "Physiotherapy", "Sports Medicine", "ER")]
    flows = Flows(StubGenerativeClient({"hospitalSuggestionPrompt": {"suggestions": suggestions}}))

    result = asyncio.run(flows.run_hospital_suggestion_flow({"symptomsOrNeeds": "knee pain"}))

    assert [s.service_or_specialty for s in result.suggestions] == ["Orthopedics", "Rheumatology", "Physiotherapy"]
    assert result.additional_advice == DEFAULT_ADVICE


def test_hospital_suggestions_wraps_single_object():
    output = {"suggestions": _suggestion("Neurology"), "additionalAdvice": "See a neurologist soon."}
    flows = Flows(StubGenerativeClient({"hospitalSuggestionPrompt": output}))

    result = asyncio.run(flows.run_hospital_suggestion_flow({"symptomsOrNeeds": "migraines"}))

    assert len(result.suggestions) == 1
    assert result.suggestions[0].service_or_specialty == "Neurology"
    assert result.additional_advice == "See a neurologist soon."


def test_hospital_prompt_lists_directory_and_optional_preferences():
    stub = StubGenerativeClient()
    flows = Flows(stub)

    asyncio.run(flows.run_hospital_suggestion_flow({"symptomsOrNeeds": "chest pain"}))
    text = stub.calls[-1].text
    assert "City General Hospital" in text
    assert "Dr. Marcus Green (Neurology)" in text
    assert "Preferred Specialty" not in text
    assert "Location Preference" not in text

    asyncio.run(flows.run_hospital_suggestion_flow({
        "symptomsOrNeeds": "chest pain",
        "preferredSpecialty": "Cardiology",
        "locationPreference": "Anytown",
    }))
    text = stub.calls[-1].text
    assert "- Preferred Specialty: Cardiology" in text
    assert "- Location Preference: Anytown" in text


def test_hospital_response_schema_caps_suggestions():
    stub = StubGenerativeClient()
    asyncio.run(Flows(stub).run_hospital_suggestion_flow({"symptomsOrNeeds": "fever"}))

    schema = stub.calls[-1].response_schema
    suggestions = schema["properties"]["suggestions"]
    assert suggestions["maxItems"] == 3
    item = suggestions["items"]
    assert item["required"] == ["serviceOrSpecialty", "reason"]
    assert item["properties"]["suggestedDoctorName"]["nullable"] is True
    assert "$ref" not in str(schema)
