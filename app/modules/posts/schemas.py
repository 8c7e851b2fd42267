from pydantic import Field
from typing import Optional, List
from app.core.serialization import CamelModel, UtcDatetime


class PostCreate(CamelModel):
    author: str = Field(..., min_length=1)
    author_id: str = Field(..., min_length=1)
    author_avatar: Optional[str] = None
    content: str = Field(..., min_length=1)
    image_url: Optional[str] = None


class CommentPayload(CamelModel):
    author: str
    avatar: Optional[str] = None
    text: str = ""


class CommentResponse(CamelModel):
    id: str
    author: Optional[str] = None
    author_id: Optional[str] = None
    avatar: Optional[str] = None
    comment: Optional[str] = None
    created_at: UtcDatetime


class PostResponse(CamelModel):
    id: str
    author: str
    author_id: Optional[str] = None
    author_avatar: Optional[str] = None
    content: str = ""
    image_url: Optional[str] = None
    likes: List[str] = []
    comments: List[CommentResponse] = []
    created_at: Optional[UtcDatetime] = None


class PostUpdate(CamelModel):
    action: str = Field(..., min_length=1)  # like | comment
    user_id: str = Field(..., min_length=1)
    comment: Optional[CommentPayload] = None


class LikeResponse(CamelModel):
    message: str
    liked: bool
    likes: int


class CommentAddedResponse(CamelModel):
    message: str
    comment: CommentResponse
