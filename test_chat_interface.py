"""
Client chat interface tests: streaming consumption and transcript persistence
"""
import asyncio
import json
from datetime import datetime

import httpx
import pytest

from aramiyot.client import ChatInterface, attachment_from_bytes
from aramiyot.client.chat_interface import ATTACHMENT_ONLY_INQUIRY, FALLBACK_ERROR_TEXT
from aramiyot.errors import AttachmentError, GenerationError
from aramiyot.genai import StubGenerativeClient
from aramiyot.main import create_app
from aramiyot.models.chat import ChatMessage, ChatTranscript, MessageSender
from aramiyot.storage import LocalStorage
from aramiyot.storage.keys import CHAT_HISTORY_KEY


class ChunkStream(httpx.AsyncByteStream):
    """Response body delivered in fixed byte chunks"""

    def __init__(self, chunks):
        self.chunks = chunks

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk


def _asgi_client(app):
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


def _mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")


async def _exchange(chat, *messages):
    results = []
    async with chat.http_client:
        for text in messages:
            results.append(await chat.send(text))
    return results


def test_headache_scenario_end_to_end(config, storage):
    app = create_app(
        config=config,
        genai_client=StubGenerativeClient({"aiHealthChatbotPrompt": ["I ", "recommend ", "rest."]}),
        storage=storage,
    )
    chat = ChatInterface(_asgi_client(app), storage)
    chat.load()

    [reply] = asyncio.run(_exchange(chat, "I have a headache"))

    assert reply.text == "I recommend rest."
    assert [m.sender for m in chat.messages] == [MessageSender.AI, MessageSender.USER, MessageSender.AI]
    assert chat.messages[1].text == "I have a headache"
    ai_messages = [m for m in chat.messages[1:] if m.sender == MessageSender.AI]
    assert len(ai_messages) == 1
    assert chat.messages[-1].text == "I recommend rest."
    assert chat.is_loading is False


def test_transcript_reloads_equal(config, storage, tmp_path):
    app = create_app(config=config, genai_client=StubGenerativeClient({"aiHealthChatbotPrompt": "Sleep well."}), storage=storage)
    chat = ChatInterface(_asgi_client(app), storage)
    chat.load()
    asyncio.run(_exchange(chat, "How much sleep do I need?"))

    reloaded = ChatInterface(_asgi_client(app), LocalStorage(str(tmp_path / "local_storage.json")))
    messages = reloaded.load()

    assert messages == chat.messages
    assert all(isinstance(m.timestamp, datetime) for m in messages)


def test_seeded_greeting_is_not_persisted(storage):
    chat = ChatInterface(_mock_client(lambda request: httpx.Response(200)), storage)

    messages = chat.load()

    assert [m.id for m in messages] == ["initial-greeting"]
    assert storage.get_item(CHAT_HISTORY_KEY) is None


def test_corrupt_history_seeds_error_greeting(storage):
    storage.set_item(CHAT_HISTORY_KEY, "{not json")
    chat = ChatInterface(_mock_client(lambda request: httpx.Response(200)), storage)

    messages = chat.load()

    assert [m.id for m in messages] == ["initial-greeting-error"]


def test_listener_sees_cumulative_text_across_split_utf8(storage):
    def handler(request):
        return httpx.Response(
            200,
            headers={"Content-Type": "text/plain; charset=utf-8"},
            stream=ChunkStream([b"caf", b"\xc3", b"\xa9 ", b"ok"]),
        )

    seen = []
    chat = ChatInterface(_mock_client(handler), storage)
    chat.load()
    chat.listener = lambda messages: seen.append(messages[-1].text)

    [reply] = asyncio.run(_exchange(chat, "coffee?"))

    assert reply.text == "café ok"
    streamed = [text for text in seen if text and text != "coffee?"]
    assert streamed == ["caf", "café ", "café ok"]


def test_error_status_replaces_placeholder(config, storage):
    app = create_app(
        config=config,
        genai_client=StubGenerativeClient({"aiHealthChatbotPrompt": GenerationError("backend down")}),
        storage=storage,
    )
    chat = ChatInterface(_asgi_client(app), storage)
    chat.load()

    [reply] = asyncio.run(_exchange(chat, "hello"))

    assert reply.text == (
        "API Error: 500 Internal Server Error. An unexpected error occurred. Please try again."
    )
    assert reply.attachment is None
    assert chat.is_loading is False
    stored = json.loads(storage.get_item(CHAT_HISTORY_KEY))
    assert stored[-1]["text"] == reply.text


def test_transport_error_uses_exception_message(storage):
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    chat = ChatInterface(_mock_client(handler), storage)
    chat.load()

    [reply] = asyncio.run(_exchange(chat, "hello"))

    assert reply.text == "Connection refused"


def test_transport_error_without_message_uses_fallback(storage):
    def handler(request):
        raise httpx.ReadError("", request=request)

    chat = ChatInterface(_mock_client(handler), storage)
    chat.load()

    [reply] = asyncio.run(_exchange(chat, "hello"))

    assert reply.text == FALLBACK_ERROR_TEXT


def test_blank_and_concurrent_sends_are_ignored(storage):
    chat = ChatInterface(_mock_client(lambda request: httpx.Response(200, text="hi")), storage)
    chat.load()

    assert asyncio.run(chat.send("   ")) is None
    chat.is_loading = True
    assert asyncio.run(chat.send("hello")) is None
    assert len(chat.messages) == 1


def test_attachment_is_sent_as_photo_data_uri(storage):
    captured = {}

    def handler(request):
        captured.update(json.loads(request.content))
        return httpx.Response(200, text="Looks fine.")

    attachment = attachment_from_bytes(b"\x89PNG\r\n", "image/png", "rash.png")
    chat = ChatInterface(_mock_client(handler), storage)
    chat.load()

    reply = asyncio.run(chat.send("", attachment=attachment))

    assert reply.text == "Looks fine."
    assert captured == {"inquiry": ATTACHMENT_ONLY_INQUIRY, "photoDataUri": attachment.url}
    assert chat.messages[1].attachment.name == "rash.png"


def test_attachment_validation():
    attachment = attachment_from_bytes(b"abc", "image/gif")
    assert attachment.url == "data:image/gif;base64,YWJj"
    assert attachment.type == "image"

    with pytest.raises(AttachmentError):
        attachment_from_bytes(b"%PDF", "application/pdf")
    with pytest.raises(AttachmentError):
        attachment_from_bytes(b"\0" * (5 * 1024 * 1024 + 1), "image/png")


def test_clear_history(storage):
    chat = ChatInterface(_mock_client(lambda request: httpx.Response(200, text="ok")), storage)
    chat.load()
    asyncio.run(chat.send("hello"))
    assert storage.get_item(CHAT_HISTORY_KEY) is not None

    chat.clear_history()

    assert storage.get_item(CHAT_HISTORY_KEY) is None
    assert [m.id for m in chat.messages] == ["initial-greeting"]


def test_transcript_round_trip_through_json():
    transcript = ChatTranscript(messages=[
        ChatMessage(id="1-user", text="Hi", sender=MessageSender.USER),
        ChatMessage(id="1-ai", text="Hello!", sender=MessageSender.AI),
    ])

    restored = ChatTranscript.model_validate(json.loads(transcript.model_dump_json()))

    assert restored == transcript
    assert not restored.is_only_greeting()
