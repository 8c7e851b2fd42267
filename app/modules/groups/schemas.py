from pydantic import Field
from typing import Optional, List
from app.core.serialization import CamelModel, UtcDatetime


class GroupCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    owner_id: Optional[str] = None


class GroupResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    members: int = 0
    member_ids: List[str] = []
    owner_id: Optional[str] = None
    created_at: Optional[UtcDatetime] = None


class GroupJoin(CamelModel):
    user_id: str = Field(..., min_length=1)


class GroupJoinResponse(CamelModel):
    message: str
    already_member: bool = False
    members: int


class MessageCreate(CamelModel):
    user: str
    user_id: str = Field(..., min_length=1)
    message: str
    avatar: Optional[str] = None


class MessageResponse(CamelModel):
    id: str
    group_id: str
    user: Optional[str] = None
    user_id: Optional[str] = None
    message: Optional[str] = None
    avatar: Optional[str] = None
    created_at: UtcDatetime


class MessageInsertResponse(CamelModel):
    acknowledged: bool
    inserted_id: str


class GroupWithMessagesResponse(CamelModel):
    group: GroupResponse
    messages: List[MessageResponse]
