"""
Chat interface client

Plays the browser chat screen against the streaming endpoint: optimistic
user message, empty assistant placeholder filled as the body streams in,
and the transcript persisted to local storage after every change.
"""
import base64
import codecs
import uuid
from datetime import datetime
from typing import Callable, List, Optional

import httpx
from pydantic import ValidationError

from ..errors import AttachmentError, StorageError
from ..models.chat import ChatAttachment, ChatMessage, ChatTranscript, MessageSender
from ..storage.keys import CHAT_HISTORY_KEY
from ..storage.local import LocalStorage
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

CHAT_STREAM_PATH = "/api/ai-chat-stream"

MAX_ATTACHMENT_MB = 5
MAX_ATTACHMENT_BYTES = MAX_ATTACHMENT_MB * 1024 * 1024

GREETING_TEXT = (
    "Hello! I'm Aramiyot's AI Health Assistant. How can I help you today? "
    "You can also attach an image if it helps describe your inquiry. "
    "Please remember, I provide general guidance and not medical advice."
)
GREETING_ERROR_TEXT = "Hello! I'm Aramiyot's AI Health Assistant. How can I help you today?"
FALLBACK_ERROR_TEXT = "Sorry, I encountered an error. Please try again later."
# Sent when the user attaches an image without typing anything
ATTACHMENT_ONLY_INQUIRY = "Please take a look at the attached image."

MessagesListener = Callable[[List[ChatMessage]], None]


class ChatApiError(Exception):
    """The chat endpoint answered with a non-success status"""


def attachment_from_bytes(data: bytes, mime_type: str, name: Optional[str] = None) -> ChatAttachment:
    """
    Build an image attachment carried as a data URI

    Raises:
        AttachmentError: Not an image, or larger than 5 MB
    """
    if not mime_type or not mime_type.startswith("image/"):
        raise AttachmentError("Please select an image file (e.g., JPG, PNG, GIF).")
    if len(data) > MAX_ATTACHMENT_BYTES:
        raise AttachmentError(f"Please select an image smaller than {MAX_ATTACHMENT_MB}MB.")

    encoded = base64.b64encode(data).decode("ascii")
    return ChatAttachment(url=f"data:{mime_type};base64,{encoded}", name=name)


def _new_id(suffix: str) -> str:
    return f"{int(datetime.now().timestamp() * 1000)}-{uuid.uuid4().hex[:8]}-{suffix}"


class ChatInterface:
    """
    Single-conversation chat client

    Only one exchange runs at a time; ``send`` while ``is_loading`` is
    ignored. There is no cancellation.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        storage: LocalStorage,
        endpoint: str = CHAT_STREAM_PATH,
        listener: Optional[MessagesListener] = None,
    ):
        self.http_client = http_client
        self.storage = storage
        self.endpoint = endpoint
        self.listener = listener
        self.messages: List[ChatMessage] = []
        self.is_loading = False

    def load(self) -> List[ChatMessage]:
        """Restore the stored transcript, or seed the greeting"""
        try:
            raw = self.storage.get_item(CHAT_HISTORY_KEY)
            if raw:
                transcript = ChatTranscript.model_validate({"messages": self.storage.get_json(CHAT_HISTORY_KEY)})
                self.messages = transcript.messages
            else:
                self.messages = [self._greeting("initial-greeting", GREETING_TEXT)]
        except (StorageError, ValidationError) as e:
            logger.error(f"Failed to load chat history from local storage: {e}")
            self.messages = [self._greeting("initial-greeting-error", GREETING_ERROR_TEXT)]

        self._notify()
        return self.messages

    def clear_history(self):
        """Forget the stored conversation and start over with the greeting"""
        try:
            self.storage.remove_item(CHAT_HISTORY_KEY)
        except StorageError as e:
            logger.error(f"Failed to clear chat history: {e}")
        self.messages = [self._greeting("initial-greeting", GREETING_TEXT)]
        self._notify()

    @staticmethod
    def _greeting(message_id: str, text: str) -> ChatMessage:
        return ChatMessage(id=message_id, text=text, sender=MessageSender.AI)

    def _notify(self):
        if self.listener is not None:
            self.listener(list(self.messages))

    def _persist(self):
        if not self.messages or ChatTranscript(messages=self.messages).is_only_greeting():
            return
        try:
            self.storage.set_json(CHAT_HISTORY_KEY, [m.model_dump(mode="json") for m in self.messages])
        except StorageError as e:
            logger.error(f"Failed to save chat history to local storage: {e}")

    def _commit(self):
        """Publish a state change: notify the listener, then persist"""
        self._notify()
        self._persist()

    def _replace(self, message_id: str, **changes) -> Optional[ChatMessage]:
        for index, message in enumerate(self.messages):
            if message.id == message_id:
                updated = message.model_copy(update=changes)
                self.messages[index] = updated
                return updated
        return None

    async def send(self, text: str, attachment: Optional[ChatAttachment] = None) -> Optional[ChatMessage]:
        """
        Send one message and stream the reply into the transcript

        Args:
            text: User input
            attachment: Optional image attachment

        Returns:
            The final assistant message, or None when the send was ignored
        """
        if (not text.strip() and attachment is None) or self.is_loading:
            return None

        self.is_loading = True
        try:
            user_message = ChatMessage(
                id=_new_id("user"),
                text=text,
                sender=MessageSender.USER,
                attachment=attachment,
            )
            self.messages.append(user_message)
            self._commit()

            ai_message_id = _new_id("ai")
            self.messages.append(ChatMessage(id=ai_message_id, text="", sender=MessageSender.AI))
            self._commit()

            body = {"inquiry": text if text.strip() else ATTACHMENT_ONLY_INQUIRY}
            if attachment is not None:
                body["photoDataUri"] = attachment.url

            try:
                await self._stream_reply(body, ai_message_id)
            except (httpx.HTTPError, ChatApiError) as e:
                logger.error(f"Error getting AI response: {e}")
                self._replace(ai_message_id, text=str(e) or FALLBACK_ERROR_TEXT, attachment=None)
                self._commit()

            return next((m for m in self.messages if m.id == ai_message_id), None)
        finally:
            self.is_loading = False

    async def _stream_reply(self, body: dict, ai_message_id: str):
        async with self.http_client.stream("POST", self.endpoint, json=body) as response:
            if not response.is_success:
                await response.aread()
                raise ChatApiError(
                    f"API Error: {response.status_code} {response.reason_phrase}. {self._error_details(response)}"
                )

            decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
            streamed_text = ""
            async for chunk in response.aiter_bytes():
                decoded = decoder.decode(chunk)
                if not decoded:
                    continue
                streamed_text += decoded
                self._replace(ai_message_id, text=streamed_text)
                self._commit()

            tail = decoder.decode(b"", final=True)
            if tail:
                self._replace(ai_message_id, text=streamed_text + tail)
                self._commit()

    @staticmethod
    def _error_details(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return "Unknown error occurred"
        if not isinstance(data, dict):
            return ""
        details = data.get("details") or data.get("detail")
        if isinstance(details, str):
            return details
        return str(data.get("error", ""))
