"""
Wellness resources, boards, reviews, todos and the hospital directory
"""
from pydantic import BaseModel, Field, TypeAdapter, field_validator
from typing import Optional, List, Union, Literal, Any, Dict, Annotated
from datetime import datetime


class ResourceBase(BaseModel):
    """Fields shared by every resource variant"""
    id: str
    title: str
    description: str
    image_url: str = Field(..., alias="imageUrl")
    category: str
    content_url: Optional[str] = Field(None, alias="contentUrl")
    duration: Optional[str] = None
    data_ai_hint: Optional[str] = Field(None, alias="dataAiHint")

    class Config:
        populate_by_name = True


class ArticleResource(ResourceBase):
    """Readable article, optionally with its full markdown body"""
    type: Literal["article"] = "article"
    content_markdown: Optional[str] = Field(None, alias="contentMarkdown")


class VideoResource(ResourceBase):
    """Video, embeddable when a YouTube id is known"""
    type: Literal["video"] = "video"
    youtube_video_id: Optional[str] = Field(None, alias="youtubeVideoId")


class AudioResource(ResourceBase):
    type: Literal["audio"] = "audio"


class LinkResource(ResourceBase):
    type: Literal["link"] = "link"


class TipResource(ResourceBase):
    type: Literal["tip"] = "tip"


WellnessResource = Annotated[
    Union[ArticleResource, VideoResource, AudioResource, LinkResource, TipResource],
    Field(discriminator="type"),
]

_resource_adapter = TypeAdapter(WellnessResource)


def parse_resource(data: Dict[str, Any]) -> ResourceBase:
    """Validate a resource dict into its variant model"""
    return _resource_adapter.validate_python(data)


def dump_resource(resource: ResourceBase) -> Dict[str, Any]:
    """Serialize a resource with wire (camelCase) names, dropping unset optionals"""
    return resource.model_dump(by_alias=True, exclude_none=True, mode="json")


class Board(BaseModel):
    """User-curated collection of resources; a resource id appears at most once"""
    id: str
    name: str
    resources: List[WellnessResource] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")

    class Config:
        populate_by_name = True

    def find_resource_index(self, resource_id: str) -> Optional[int]:
        for index, resource in enumerate(self.resources):
            if resource.id == resource_id:
                return index
        return None


class BoardCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class BoardRenameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class Review(BaseModel):
    """Append-only review of a resource"""
    id: str
    resource_id: str = Field(..., alias="resourceId")
    user_name: str = Field(..., alias="userName")
    rating: int = Field(..., ge=1, le=5)
    comment: str
    timestamp: datetime = Field(default_factory=datetime.now)

    class Config:
        populate_by_name = True


class ReviewCreateRequest(BaseModel):
    user_name: str = Field(..., alias="userName", min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=2000)

    class Config:
        populate_by_name = True

    @field_validator("user_name", "comment")
    @classmethod
    def not_blank(cls, v):
        """Reject whitespace-only values"""
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()


class TodoItem(BaseModel):
    """Dashboard todo entry"""
    id: str
    text: str
    completed: bool = False
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")

    class Config:
        populate_by_name = True


class TodoCreateRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=500)


class TodoUpdateRequest(BaseModel):
    completed: Optional[bool] = None
    text: Optional[str] = Field(None, min_length=1, max_length=500)


class Doctor(BaseModel):
    id: str
    name: str
    specialty: str
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

    class Config:
        populate_by_name = True


class Service(BaseModel):
    id: str
    name: str
    description: str


class Hospital(BaseModel):
    """Directory entry for a hospital or clinic"""
    id: str
    name: str
    address: str
    image_url: str = Field(..., alias="imageUrl")
    services: List[Service] = Field(default_factory=list)
    doctors: List[Doctor] = Field(default_factory=list)
    phone: Optional[str] = None
    website: Optional[str] = None

    class Config:
        populate_by_name = True
