"""
"Save for offline" copies of library resources
"""
from typing import Any, Dict, Optional

from ..errors import StorageError
from ..models.resources import (
    ResourceBase, ArticleResource, VideoResource, AudioResource, LinkResource, TipResource,
    dump_resource
)
from ..storage.keys import offline_key
from ..storage.local import LocalStorage
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

VIDEO_METADATA_FIELDS = (
    "id", "title", "description", "imageUrl", "category", "type", "youtubeVideoId", "contentUrl",
)


def offline_copy(resource: ResourceBase) -> Optional[Dict[str, Any]]:
    """
    What to keep offline for a resource, or None when it cannot be saved

    Articles with a markdown body are copied whole; YouTube videos keep
    their metadata so they can be re-embedded.
    """
    if isinstance(resource, ArticleResource):
        return dump_resource(resource) if resource.content_markdown else None
    elif isinstance(resource, VideoResource):
        if not resource.youtube_video_id:
            return None
        data = dump_resource(resource)
        return {field: data[field] for field in VIDEO_METADATA_FIELDS if field in data}
    elif isinstance(resource, (AudioResource, LinkResource, TipResource)):
        return None
    raise TypeError(f"Unsupported resource type: {type(resource).__name__}")


class OfflineService:
    """Offline copies stored per resource"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def save(self, resource: ResourceBase) -> bool:
        """
        Save a resource for offline use

        Returns:
            bool: False when the resource type has nothing to save
        """
        copy = offline_copy(resource)
        if copy is None:
            logger.info(f"Resource {resource.id} ({resource.type}) cannot be saved offline")
            return False

        self.storage.set_json(offline_key(resource.id), copy)
        logger.info(f"Saved resource {resource.id} for offline use")
        return True

    def load(self, resource_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self.storage.get_json(offline_key(resource_id))
        except StorageError as e:
            logger.error(f"Offline copy of {resource_id} is unreadable: {e}")
            return None

    def is_saved(self, resource_id: str) -> bool:
        return self.storage.get_item(offline_key(resource_id)) is not None
