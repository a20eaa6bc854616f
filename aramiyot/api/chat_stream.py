"""
Streaming chat endpoint

Relays the chat flow's text increments to the client as a plain UTF-8
body, in the order the model produces them. The body simply ends when
generation completes or fails; clients cannot tell a dropped stream from
a short answer.
"""
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse

from ..flows import Flows
from ..models.chat import ErrorResponse
from ..utils.logger import setup_logger
from .dependencies import get_flows, read_json_body

logger = setup_logger(__name__)
router = APIRouter(prefix="/api", tags=["chat"])

STREAM_ERROR = ErrorResponse(
    error="Failed to process chat stream",
    details="An unexpected error occurred. Please try again.",
)


async def _first_chunk(stream: AsyncIterator[str]) -> Optional[str]:
    """Advance to the first non-empty chunk, or None when the stream is empty"""
    async for chunk in stream:
        if chunk:
            return chunk
    return None


@router.post("/ai-chat-stream")
async def ai_chat_stream(request: Request, flows: Flows = Depends(get_flows)):
    """
    Stream a chat response

    Body: ``{"inquiry": str, "photoDataUri"?: str}``. Invalid input is
    rejected with 400 before any generation happens. A failure before the
    first chunk returns 500 with a generic message; a failure after it
    ends the body early.
    """
    data = await read_json_body(request)
    flow_input = flows.chat.validate_input(data)

    logger.info(f"Chat stream request ({len(flow_input.inquiry)} chars, photo={bool(flow_input.photo_data_uri)})")

    stream = flows.stream_chat_flow(flow_input)
    try:
        first = await _first_chunk(stream)
    except Exception as e:
        logger.error(f"Chat stream failed before the first chunk: {e}", exc_info=True)
        await stream.aclose()
        return JSONResponse(status_code=500, content=STREAM_ERROR.model_dump())

    async def relay():
        chunk_count = 0
        try:
            if first is not None:
                chunk_count += 1
                yield first.encode("utf-8")
            async for chunk in stream:
                if not chunk:
                    continue
                chunk_count += 1
                yield chunk.encode("utf-8")
        except Exception as e:
            logger.error(f"Chat stream failed after {chunk_count} chunks: {e}", exc_info=True)
        finally:
            await stream.aclose()
            logger.debug(f"Chat stream closed after {chunk_count} chunks")

    return StreamingResponse(
        relay(),
        media_type="text/plain; charset=utf-8",
        headers={
            "Cache-Control": "no-cache",
            "X-Content-Type-Options": "nosniff",
            "X-Accel-Buffering": "no",
        }
    )
