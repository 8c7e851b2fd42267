from fastapi import APIRouter, Depends, Query
from pymongo.database import Database
from app.database.mongo_client import get_database
from app.modules.groups.schemas import (
    GroupCreate, GroupResponse, GroupJoin, GroupJoinResponse,
    MessageCreate, MessageInsertResponse, GroupWithMessagesResponse
)
from app.modules.groups.service import GroupService
from app.core.dependencies import require_object_id
from typing import List

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_service(db: Database = Depends(get_database)) -> GroupService:
    return GroupService(db)


@router.post("", response_model=GroupResponse, status_code=201)
async def create_group(
    group_data: GroupCreate,
    service: GroupService = Depends(get_group_service)
):
    """Create a new community group"""
    return service.create_group(group_data)


@router.get("", response_model=List[GroupResponse])
async def list_groups(
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    service: GroupService = Depends(get_group_service)
):
    """List community groups, newest first"""
    return service.list_groups(limit=limit, offset=offset)


@router.get("/{group_id}", response_model=GroupWithMessagesResponse)
async def get_group(
    group_id: str,
    service: GroupService = Depends(get_group_service)
):
    """Get a group together with its chat messages in send order"""
    return service.get_group_with_messages(require_object_id(group_id, "group"))


@router.put("/{group_id}/join", response_model=GroupJoinResponse)
async def join_group(
    group_id: str,
    join_data: GroupJoin,
    service: GroupService = Depends(get_group_service)
):
    """Join a group"""
    oid = require_object_id(group_id, "group")
    return service.join_group(oid, join_data.user_id)


@router.post("/{group_id}/messages", response_model=MessageInsertResponse, status_code=201)
async def send_message(
    group_id: str,
    message_data: MessageCreate,
    service: GroupService = Depends(get_group_service)
):
    """Post a chat message to a group"""
    oid = require_object_id(group_id, "group")
    return service.send_message(oid, message_data)
