"""
Client-side chat for Aramiyot
"""

from .chat_interface import ChatInterface, ChatApiError, attachment_from_bytes

__all__ = [
    'ChatInterface',
    'ChatApiError',
    'attachment_from_bytes'
]
