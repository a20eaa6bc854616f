"""
Storage module for Aramiyot
"""

from .local import LocalStorage
from . import keys

__all__ = [
    'LocalStorage',
    'keys'
]
