"""
Services module for Aramiyot
"""

from .boards import (
    BoardsStore,
    BoardBackend,
    LocalStorageBoardBackend,
    DynamoDBBoardBackend,
    PersistenceNotice,
    create_board_backend
)
from .reviews import ReviewService
from .offline import OfflineService, offline_copy
from .todos import TodoService, TodoNotFoundError
from .recommendations import recommendations_to_resources, build_activity_prompt

__all__ = [
    'BoardsStore',
    'BoardBackend',
    'LocalStorageBoardBackend',
    'DynamoDBBoardBackend',
    'PersistenceNotice',
    'create_board_backend',
    'ReviewService',
    'OfflineService',
    'offline_copy',
    'TodoService',
    'TodoNotFoundError',
    'recommendations_to_resources',
    'build_activity_prompt'
]
