from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError
from app.core.serialization import document_to_dict, utc_now
from app.modules.posts.models import POSTS_COLLECTION
from app.modules.posts.schemas import (
    PostCreate, PostResponse, PostUpdate, CommentPayload, CommentResponse,
    LikeResponse, CommentAddedResponse
)
from typing import Any, Dict, List, Union
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _to_post_response(document: Dict[str, Any]) -> PostResponse:
    """Normalized projection; likes and comments default to empty lists"""
    data = document_to_dict(document)
    data["likes"] = data.get("likes") or []
    data["comments"] = data.get("comments") or []
    return PostResponse(**data)


class PostService:
    def __init__(self, db: Database):
        self.posts = db[POSTS_COLLECTION]

    def create_post(self, post_data: PostCreate) -> PostResponse:
        """Create a new post with no likes or comments"""
        try:
            document = {
                "author": post_data.author,
                "authorId": post_data.author_id,
                "authorAvatar": post_data.author_avatar,
                "content": post_data.content,
                "imageUrl": post_data.image_url,
                "likes": [],
                "comments": [],
                "createdAt": utc_now(),
            }
            result = self.posts.insert_one(document)
            logger.info(f"Created post {result.inserted_id} by {post_data.author_id}")
            return _to_post_response(document)
        except PyMongoError:
            logger.exception("Failed to create post")
            raise HTTPException(status_code=500, detail="Internal server error")

    def list_posts(self, limit: int = 20, offset: int = 0) -> List[PostResponse]:
        """List posts for the feed, newest first"""
        try:
            cursor = self.posts.find()\
                .sort("createdAt", DESCENDING)\
                .skip(offset)\
                .limit(limit)
            return [_to_post_response(post) for post in cursor]
        except PyMongoError:
            logger.exception("Failed to list posts")
            raise HTTPException(status_code=500, detail="Internal server error")

    def get_post(self, post_id: ObjectId) -> PostResponse:
        """Get a single post"""
        try:
            post = self.posts.find_one({"_id": post_id})
            if not post:
                raise HTTPException(status_code=404, detail="Post not found")
            return _to_post_response(post)
        except HTTPException:
            raise
        except PyMongoError:
            logger.exception(f"GET post {post_id} failed")
            raise HTTPException(status_code=500, detail="Internal server error")

    def update_post(self, post_id: ObjectId, update: PostUpdate) -> Union[LikeResponse, CommentAddedResponse]:
        """Dispatch a like toggle or a new comment"""
        try:
            if update.action == "like":
                return self.toggle_like(post_id, update.user_id)
            if update.action == "comment":
                return self.add_comment(post_id, update.user_id, update.comment)
            raise HTTPException(status_code=400, detail="Invalid action")
        except HTTPException:
            raise
        except PyMongoError:
            logger.exception(f"PUT post {post_id} failed")
            raise HTTPException(status_code=500, detail="Internal server error")

    def toggle_like(self, post_id: ObjectId, user_id: str) -> LikeResponse:
        """
        Add user_id to likes when absent, otherwise remove it.

        Each branch is a conditional single-document update, so the likes
        array never holds the same user twice.
        """
        added = self.posts.update_one(
            {"_id": post_id, "likes": {"$ne": user_id}},
            {"$addToSet": {"likes": user_id}}
        )
        if added.modified_count:
            liked = True
        else:
            removed = self.posts.update_one(
                {"_id": post_id, "likes": user_id},
                {"$pull": {"likes": user_id}}
            )
            liked = False if removed.modified_count else None

        post = self.posts.find_one({"_id": post_id}, {"likes": 1})
        if post is None:
            raise HTTPException(status_code=404, detail="Post not found")

        likes = post.get("likes") or []
        if liked is None:
            # a concurrent toggle landed between the two updates
            liked = user_id in likes
        logger.info(f"User {user_id} {'liked' if liked else 'unliked'} post {post_id}")
        return LikeResponse(
            message="Post liked" if liked else "Like removed",
            liked=liked,
            likes=len(likes),
        )

    def add_comment(self, post_id: ObjectId, user_id: str, payload: CommentPayload) -> CommentAddedResponse:
        """Append a comment; comments are never edited or removed"""
        if payload is None or not payload.text.strip():
            raise HTTPException(status_code=400, detail="Comment text is required")

        created_at = utc_now()
        comment = {
            "id": f"c{int(created_at.timestamp() * 1000)}",
            "author": payload.author,
            "authorId": user_id,
            "avatar": payload.avatar,
            "comment": payload.text.strip(),
            "createdAt": created_at,
        }
        result = self.posts.update_one(
            {"_id": post_id},
            {"$push": {"comments": comment}}
        )
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Post not found")

        logger.info(f"Comment {comment['id']} added to post {post_id}")
        return CommentAddedResponse(message="Comment added", comment=CommentResponse(**comment))
