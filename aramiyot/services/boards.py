"""
Boards store: user-curated collections of wellness resources

The store keeps an in-memory mirror of one user's boards and writes every
mutation through to a backend before returning. When a backend write fails
the mirror keeps the change for the rest of the session and a
``PersistenceNotice`` is queued for the caller to surface.
"""
import json
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import BoardNotFoundError, StorageError
from ..models.resources import Board, ResourceBase
from ..storage.keys import BOARDS_KEY
from ..storage.local import LocalStorage
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


def _dump_board(board: Board) -> Dict[str, Any]:
    return board.model_dump(by_alias=True, exclude_none=True, mode="json")


class PersistenceNotice:
    """Transient notification that a board change was not persisted"""

    def __init__(self, operation: str, board_id: str, message: str):
        self.operation = operation
        self.board_id = board_id
        self.message = message
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, str]:
        return {
            "operation": self.operation,
            "boardId": self.board_id,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }

    def __repr__(self) -> str:
        return f"PersistenceNotice({self.operation!r}, {self.board_id!r}, {self.message!r})"


class BoardBackend:
    """Uniform CRUD contract over a per-user board collection"""

    def load_boards(self, user_id: str) -> List[Board]:
        raise NotImplementedError

    def save_board(self, user_id: str, board: Board):
        raise NotImplementedError

    def delete_board(self, user_id: str, board_id: str):
        raise NotImplementedError


class LocalStorageBoardBackend(BoardBackend):
    """
    Boards for every user under one local storage key

    Layout: ``{"<user_id>": [board, ...]}``, boards in creation order.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _read_all(self) -> Dict[str, List[Dict[str, Any]]]:
        data = self.storage.get_json(BOARDS_KEY, {})
        if not isinstance(data, dict):
            raise StorageError(f"Stored value for '{BOARDS_KEY}' is not an object")
        return data

    def load_boards(self, user_id: str) -> List[Board]:
        return [Board.model_validate(item) for item in self._read_all().get(user_id, [])]

    def save_board(self, user_id: str, board: Board):
        data = self._read_all()
        boards = data.setdefault(user_id, [])
        dumped = _dump_board(board)
        for index, item in enumerate(boards):
            if item.get("id") == board.id:
                boards[index] = dumped
                break
        else:
            boards.append(dumped)
        self.storage.set_json(BOARDS_KEY, data)

    def delete_board(self, user_id: str, board_id: str):
        data = self._read_all()
        boards = data.get(user_id, [])
        remaining = [item for item in boards if item.get("id") != board_id]
        if len(remaining) == len(boards):
            return
        data[user_id] = remaining
        self.storage.set_json(BOARDS_KEY, data)


class DynamoDBBoardBackend(BoardBackend):
    """
    Boards in a DynamoDB table, one item per board

    Partition key ``user_id``, sort key ``board_id``. Writes are
    unconditional ``put_item`` calls, so the last writer wins.
    """

    def __init__(self, table_name: str, region: str, table=None):
        self.table_name = table_name
        self.region = region
        if table is None:
            table = boto3.resource('dynamodb', region_name=region).Table(table_name)
        self.table = table

        logger.info(f"DynamoDB board backend using table {table_name} in {region}")

    @staticmethod
    def _to_item(user_id: str, board: Board) -> Dict[str, Any]:
        dumped = _dump_board(board)
        return {
            'user_id': user_id,
            'board_id': board.id,
            'name': board.name,
            'created_at': dumped['createdAt'],
            # Resources are stored as a JSON string; DynamoDB rejects floats and empty sets
            'resources': json.dumps(dumped['resources'], ensure_ascii=False),
        }

    @staticmethod
    def _from_item(item: Dict[str, Any]) -> Board:
        return Board.model_validate({
            'id': item['board_id'],
            'name': item['name'],
            'createdAt': item['created_at'],
            'resources': json.loads(item.get('resources') or '[]'),
        })

    def load_boards(self, user_id: str) -> List[Board]:
        items: List[Dict[str, Any]] = []
        query_args: Dict[str, Any] = {'KeyConditionExpression': Key('user_id').eq(user_id)}

        try:
            while True:
                response = self.table.query(**query_args)
                items.extend(response.get('Items', []))
                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                query_args['ExclusiveStartKey'] = last_key
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to load boards for user {user_id}: {e}") from e

        boards = [self._from_item(item) for item in items]
        boards.sort(key=lambda board: board.created_at)
        return boards

    def save_board(self, user_id: str, board: Board):
        try:
            self.table.put_item(Item=self._to_item(user_id, board))
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to save board {board.id}: {e}") from e

    def delete_board(self, user_id: str, board_id: str):
        try:
            self.table.delete_item(Key={'user_id': user_id, 'board_id': board_id})
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete board {board_id}: {e}") from e


class BoardsStore:
    """
    One user's boards

    Mutations apply to the in-memory mirror first and are then written
    through to the backend. When a mutating call returns, the change is
    either durable in the backend or described by a pending notice.
    """

    def __init__(self, backend: BoardBackend, user_id: str):
        self.backend = backend
        self.user_id = user_id
        self._boards: List[Board] = []
        self.notices: List[PersistenceNotice] = []
        self.loaded = False

    def load(self) -> "BoardsStore":
        """Populate the mirror from the backend; an unreadable backend leaves it empty"""
        try:
            self._boards = self.backend.load_boards(self.user_id)
        except (StorageError, ValueError) as e:
            logger.error(f"Failed to load boards for user {self.user_id}: {e}")
            self._boards = []
            self._notify("load", "", "Could not load your boards. Changes may not be saved.")
        self.loaded = True
        return self

    @property
    def boards(self) -> List[Board]:
        return list(self._boards)

    def pop_notices(self) -> List[PersistenceNotice]:
        """Return and clear pending persistence notices"""
        notices, self.notices = self.notices, []
        return notices

    def _notify(self, operation: str, board_id: str, message: str):
        self.notices.append(PersistenceNotice(operation, board_id, message))

    def _persist(self, board: Board, operation: str):
        try:
            self.backend.save_board(self.user_id, board)
        except StorageError as e:
            logger.error(f"Failed to persist board {board.id} ({operation}): {e}")
            self._notify(operation, board.id, f"Could not save changes to board '{board.name}'.")

    def _require(self, board_id: str) -> Board:
        board = self.get_board_by_id(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)
        return board

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValueError("Board name cannot be blank")
        return cleaned

    def get_board_by_id(self, board_id: str) -> Optional[Board]:
        for board in self._boards:
            if board.id == board_id:
                return board
        return None

    def create_board(self, name: str) -> Board:
        """
        Create an empty board

        Args:
            name: Display name, stripped; must not be blank

        Returns:
            Board: The new board with a fresh id
        """
        board = Board(id=str(uuid.uuid4()), name=self._clean_name(name))
        self._boards.append(board)
        self._persist(board, "create")

        logger.info(f"Created board {board.id} for user {self.user_id}")
        return board

    def add_resource_to_board(self, board_id: str, resource: ResourceBase) -> Board:
        """
        Upsert a resource: an entry with the same id is replaced in place,
        otherwise the resource is appended
        """
        board = self._require(board_id)
        copy = resource.model_copy(deep=True)
        index = board.find_resource_index(resource.id)
        if index is None:
            board.resources.append(copy)
        else:
            board.resources[index] = copy
        self._persist(board, "add_resource")
        return board

    def remove_resource_from_board(self, board_id: str, resource_id: str) -> Board:
        """Remove a resource; absent ids are a no-op"""
        board = self._require(board_id)
        index = board.find_resource_index(resource_id)
        if index is None:
            return board
        del board.resources[index]
        self._persist(board, "remove_resource")
        return board

    def update_board_name(self, board_id: str, new_name: str) -> Board:
        board = self._require(board_id)
        board.name = self._clean_name(new_name)
        self._persist(board, "rename")
        return board

    def delete_board(self, board_id: str):
        """Delete a board; unknown ids are a no-op"""
        board = self.get_board_by_id(board_id)
        if board is None:
            logger.info(f"Board {board_id} not found for user {self.user_id}, nothing to delete")
            return
        self._boards = [b for b in self._boards if b.id != board_id]
        try:
            self.backend.delete_board(self.user_id, board_id)
        except StorageError as e:
            logger.error(f"Failed to delete board {board_id} from backend: {e}")
            self._notify("delete", board_id, f"Could not delete board '{board.name}' from storage.")

        logger.info(f"Deleted board {board_id} for user {self.user_id}")


def create_board_backend(config, storage: Optional[LocalStorage] = None) -> BoardBackend:
    """Build the configured board backend"""
    backend = config.BOARDS_BACKEND
    if backend == "dynamodb":
        return DynamoDBBoardBackend(config.BOARDS_TABLE_NAME, config.AWS_REGION)
    if backend == "local":
        if storage is None:
            raise ValueError("Local board backend requires a LocalStorage instance")
        return LocalStorageBoardBackend(storage)
    raise ValueError(f"Unknown BOARDS_BACKEND: {backend}")
