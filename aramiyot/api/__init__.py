"""
API module for Aramiyot
"""

from .chat_stream import router as chat_stream_router
from .flows import router as flows_router
from .boards import router as boards_router
from .library import router as library_router
from .todos import router as todos_router

__all__ = [
    'chat_stream_router',
    'flows_router',
    'boards_router',
    'library_router',
    'todos_router'
]
