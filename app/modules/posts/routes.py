from fastapi import APIRouter, Depends, Query
from pymongo.database import Database
from app.database.mongo_client import get_database
from app.modules.posts.schemas import (
    PostCreate, PostResponse, PostUpdate, LikeResponse, CommentAddedResponse
)
from app.modules.posts.service import PostService
from app.core.dependencies import require_object_id
from typing import List, Union

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(db: Database = Depends(get_database)) -> PostService:
    return PostService(db)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    service: PostService = Depends(get_post_service)
):
    """Create a new post"""
    return service.create_post(post_data)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    service: PostService = Depends(get_post_service)
):
    """Feed of posts, newest first"""
    return service.list_posts(limit=limit, offset=offset)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service)
):
    """Get a single post by ID"""
    return service.get_post(require_object_id(post_id, "post"))


@router.put("/{post_id}", response_model=Union[LikeResponse, CommentAddedResponse])
async def update_post(
    post_id: str,
    update: PostUpdate,
    service: PostService = Depends(get_post_service)
):
    """Update a post: action=like toggles the user's like, action=comment appends a comment"""
    oid = require_object_id(post_id, "post")
    return service.update_post(oid, update)
