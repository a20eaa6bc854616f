"""
Boards API, scoped to the signed-in user
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from ..data.catalog import get_resource
from ..errors import InvalidInputError, flatten_validation_errors
from ..models.resources import Board, BoardCreateRequest, BoardRenameRequest, ResourceBase, parse_resource
from ..services.boards import BoardsStore
from ..utils.logger import setup_logger
from .dependencies import get_boards_store

logger = setup_logger(__name__)
router = APIRouter(prefix="/api/boards", tags=["boards"])


def _board_json(board: Board) -> Dict[str, Any]:
    return board.model_dump(by_alias=True, exclude_none=True, mode="json")


def _notices(store: BoardsStore) -> List[Dict[str, str]]:
    return [notice.to_dict() for notice in store.pop_notices()]


def _resolve_resource(payload: Dict[str, Any]) -> ResourceBase:
    """A full resource object, or ``{"resourceId": ...}`` referencing the catalog"""
    if set(payload.keys()) == {"resourceId"}:
        resource = get_resource(str(payload["resourceId"]))
        if resource is None:
            raise HTTPException(status_code=404, detail=f"Resource not found: {payload['resourceId']}")
        return resource
    try:
        return parse_resource(payload)
    except ValidationError as e:
        raise InvalidInputError(flatten_validation_errors(e.errors()))


@router.get("")
async def list_boards(store: BoardsStore = Depends(get_boards_store)):
    return {
        "boards": [_board_json(board) for board in store.boards],
        "notices": _notices(store)
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_board(request: BoardCreateRequest, store: BoardsStore = Depends(get_boards_store)):
    try:
        board = store.create_board(request.name)
    except ValueError as e:
        raise InvalidInputError({"formErrors": [], "fieldErrors": {"name": [str(e)]}})
    return {"board": _board_json(board), "notices": _notices(store)}


@router.get("/{board_id}")
async def get_board(board_id: str, store: BoardsStore = Depends(get_boards_store)):
    board = store.get_board_by_id(board_id)
    if board is None:
        raise HTTPException(status_code=404, detail=f"Board not found: {board_id}")
    return {"board": _board_json(board), "notices": _notices(store)}


@router.patch("/{board_id}")
async def rename_board(
    board_id: str,
    request: BoardRenameRequest,
    store: BoardsStore = Depends(get_boards_store)
):
    try:
        board = store.update_board_name(board_id, request.name)
    except ValueError as e:
        raise InvalidInputError({"formErrors": [], "fieldErrors": {"name": [str(e)]}})
    return {"board": _board_json(board), "notices": _notices(store)}


@router.delete("/{board_id}")
async def delete_board(board_id: str, store: BoardsStore = Depends(get_boards_store)):
    store.delete_board(board_id)
    return {"success": True, "notices": _notices(store)}


@router.put("/{board_id}/resources")
async def add_resource(
    board_id: str,
    payload: Dict[str, Any] = Body(...),
    store: BoardsStore = Depends(get_boards_store)
):
    """Add a resource to a board, replacing any entry with the same id"""
    resource = _resolve_resource(payload)
    board = store.add_resource_to_board(board_id, resource)
    return {"board": _board_json(board), "notices": _notices(store)}


@router.delete("/{board_id}/resources/{resource_id}")
async def remove_resource(board_id: str, resource_id: str, store: BoardsStore = Depends(get_boards_store)):
    board = store.remove_resource_from_board(board_id, resource_id)
    return {"board": _board_json(board), "notices": _notices(store)}
