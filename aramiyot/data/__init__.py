"""
Static data for Aramiyot
"""

from .catalog import (
    CURATED_WELLNESS_RESOURCES,
    AUDIO_BOOK_SUMMARIES,
    HOSPITALS,
    get_resource,
    list_resources,
    hospital_directory
)

__all__ = [
    'CURATED_WELLNESS_RESOURCES',
    'AUDIO_BOOK_SUMMARIES',
    'HOSPITALS',
    'get_resource',
    'list_resources',
    'hospital_directory'
]
