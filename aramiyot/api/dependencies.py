"""
FastAPI dependencies resolving application services from ``app.state``

Everything here is constructed once in ``create_app`` and threaded into
route handlers through ``Depends``.
"""
import json
from typing import Any, Dict

from fastapi import Depends, Request

from ..auth import require_user_id
from ..errors import InvalidInputError, PayloadTooLargeError
from ..flows import Flows
from ..services import BoardsStore, ReviewService, OfflineService, TodoService
from ..storage import LocalStorage


def get_flows(request: Request) -> Flows:
    return request.app.state.flows


def get_storage(request: Request) -> LocalStorage:
    return request.app.state.storage


def get_boards_store(request: Request, user_id: str = Depends(require_user_id)) -> BoardsStore:
    """Boards of the signed-in user, loaded from the configured backend"""
    return BoardsStore(request.app.state.board_backend, user_id).load()


def get_review_service(storage: LocalStorage = Depends(get_storage)) -> ReviewService:
    return ReviewService(storage)


def get_offline_service(storage: LocalStorage = Depends(get_storage)) -> OfflineService:
    return OfflineService(storage)


def get_todo_service(storage: LocalStorage = Depends(get_storage)) -> TodoService:
    return TodoService(storage)


async def read_json_body(request: Request, allow_empty: bool = False) -> Dict[str, Any]:
    """
    Read a JSON object body, enforcing the configured size limit

    Args:
        allow_empty: Treat a missing body as an empty object

    Raises:
        PayloadTooLargeError: Body larger than MAX_REQUEST_BYTES
        InvalidInputError: Body is not a JSON object
    """
    limit = request.app.state.config.MAX_REQUEST_BYTES

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit)

    body = await request.body()
    if len(body) > limit:
        raise PayloadTooLargeError(limit)

    if allow_empty and not body.strip():
        return {}

    try:
        data = json.loads(body) if body else None
    except ValueError:
        raise InvalidInputError.form_error("Request body must be valid JSON")

    if not isinstance(data, dict):
        raise InvalidInputError.form_error("Request body must be a JSON object")

    return data
