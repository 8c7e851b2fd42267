from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError
from app.core.serialization import document_to_dict, utc_now
from app.modules.groups.models import GROUPS_COLLECTION, MESSAGES_COLLECTION
from app.modules.groups.schemas import (
    GroupCreate, GroupResponse, GroupJoinResponse,
    MessageCreate, MessageResponse, MessageInsertResponse, GroupWithMessagesResponse
)
from typing import Any, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _to_group_response(document: Dict[str, Any]) -> GroupResponse:
    """The counter is derived from the member set on every read"""
    data = document_to_dict(document)
    data["memberIds"] = data.get("memberIds") or []
    data["members"] = len(data["memberIds"])
    return GroupResponse(**data)


class GroupService:
    def __init__(self, db: Database):
        self.groups = db[GROUPS_COLLECTION]
        self.messages = db[MESSAGES_COLLECTION]

    def create_group(self, group_data: GroupCreate) -> GroupResponse:
        """Create a new group; the owner, when given, is its first member"""
        try:
            member_ids = [group_data.owner_id] if group_data.owner_id else []
            document = {
                "name": group_data.name,
                "description": group_data.description,
                "imageUrl": group_data.image_url,
                "ownerId": group_data.owner_id,
                "memberIds": member_ids,
                "members": len(member_ids),
                "createdAt": utc_now(),
            }
            result = self.groups.insert_one(document)
            logger.info(f"Created group {result.inserted_id} ({group_data.name})")
            return _to_group_response(document)
        except PyMongoError:
            logger.exception("Failed to create group")
            raise HTTPException(status_code=500, detail="Internal server error")

    def list_groups(self, limit: int = 20, offset: int = 0) -> List[GroupResponse]:
        """List groups, newest first"""
        try:
            cursor = self.groups.find()\
                .sort("createdAt", DESCENDING)\
                .skip(offset)\
                .limit(limit)
            return [_to_group_response(group) for group in cursor]
        except PyMongoError:
            logger.exception("Failed to list groups")
            raise HTTPException(status_code=500, detail="Internal server error")

    def join_group(self, group_id: ObjectId, user_id: str) -> GroupJoinResponse:
        """
        Add user_id to the group's member set.

        The member set and the counter move together in one conditional update
        that only matches while the user is absent, so a repeat join is a no-op.
        """
        try:
            result = self.groups.update_one(
                {"_id": group_id, "memberIds": {"$ne": user_id}},
                {
                    "$addToSet": {"memberIds": user_id},
                    "$inc": {"members": 1},
                }
            )
            group = self.groups.find_one({"_id": group_id}, {"memberIds": 1})
            if group is None:
                raise HTTPException(status_code=404, detail="Group not found")

            members = len(group.get("memberIds") or [])
            if result.modified_count == 0:
                logger.info(f"User {user_id} is already a member of group {group_id}")
                return GroupJoinResponse(
                    message="Already a member of this group",
                    already_member=True,
                    members=members,
                )

            logger.info(f"User {user_id} joined group {group_id}")
            return GroupJoinResponse(message="Successfully joined group", members=members)
        except HTTPException:
            raise
        except PyMongoError:
            logger.exception(f"Failed to join group {group_id}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def send_message(self, group_id: ObjectId, message_data: MessageCreate) -> MessageInsertResponse:
        """Insert a chat message. Group existence and membership are not checked."""
        try:
            result = self.messages.insert_one({
                "groupId": group_id,
                "user": message_data.user,
                "userId": message_data.user_id,
                "message": message_data.message,
                "avatar": message_data.avatar,
                "createdAt": utc_now(),
            })
            return MessageInsertResponse(
                acknowledged=result.acknowledged,
                inserted_id=str(result.inserted_id),
            )
        except PyMongoError:
            logger.exception(f"Error sending message to group {group_id}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def get_group_with_messages(self, group_id: ObjectId) -> GroupWithMessagesResponse:
        """Get a group and all of its messages, oldest first"""
        try:
            group = self.groups.find_one({"_id": group_id})
            if not group:
                raise HTTPException(status_code=404, detail="Group not found")

            cursor = self.messages.find({"groupId": group_id}).sort("createdAt", ASCENDING)
            messages = [MessageResponse(**document_to_dict(m)) for m in cursor]

            return GroupWithMessagesResponse(
                group=_to_group_response(group),
                messages=messages,
            )
        except HTTPException:
            raise
        except PyMongoError:
            logger.exception(f"Failed to read group {group_id}")
            raise HTTPException(status_code=500, detail="Internal server error")
