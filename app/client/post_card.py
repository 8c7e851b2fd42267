import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.client.api_client import ApiError, PetoraClient
from app.client.notifications import Notifier
from app.client.optimistic import OptimisticState
from app.client.viewer import Viewer
from app.modules.posts.schemas import CommentResponse, PostResponse

logger = logging.getLogger(__name__)


class LikeState(BaseModel):
    model_config = ConfigDict(frozen=True)

    liked: bool
    count: int

    def toggled(self) -> "LikeState":
        return LikeState(liked=not self.liked, count=self.count + (-1 if self.liked else 1))


class PostCardView:
    """Single feed post with an optimistic like button and a comment box"""

    def __init__(
        self,
        api: PetoraClient,
        post: PostResponse,
        viewer: Optional[Viewer] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.api = api
        self.post = post
        self.viewer = viewer
        self.notifier = notifier or Notifier()
        self.draft = ""
        self.comments: List[CommentResponse] = list(post.comments)
        liked = bool(viewer and viewer.user_id in post.likes)
        self._like = OptimisticState(LikeState(liked=liked, count=len(post.likes)))

    @property
    def is_liked(self) -> bool:
        return self._like.value.liked

    @property
    def like_count(self) -> int:
        return self._like.value.count

    @property
    def like_pending(self) -> bool:
        return self._like.has_pending

    @property
    def sorted_comments(self) -> List[CommentResponse]:
        return sorted(self.comments, key=lambda c: c.created_at)

    async def toggle_like(self) -> bool:
        if not self.viewer:
            self.notifier.error("Login to like posts")
            return False
        if self._like.has_pending:
            return False

        prior = self._like.value
        try:
            await self._like.run(
                forward=lambda state: state.toggled(),
                inverse=lambda _: prior,
                request=lambda: self.api.like_post(self.post.id, self.viewer.user_id),
            )
        except ApiError as e:
            logger.error(f"Error updating like on post {self.post.id}: {e}")
            self.notifier.error("Something went wrong.")
            return False
        return True

    async def submit_comment(self, text: str = None) -> bool:
        """Post a comment, then re-read the post for the authoritative comment list"""
        text = (self.draft if text is None else text).strip()
        if not self.viewer:
            self.notifier.error("Login to comment")
            return False
        if not text:
            return False

        try:
            await self.api.comment_on_post(
                self.post.id,
                self.viewer.user_id,
                author=self.viewer.display_name,
                text=text,
                avatar=self.viewer.avatar,
            )
        except ApiError as e:
            logger.error(f"Error adding comment to post {self.post.id}: {e}")
            self.notifier.error("Could not add comment.")
            return False

        # the comment is saved; a failed re-read only leaves the list stale
        self.draft = ""
        try:
            refreshed = await self.api.get_post(self.post.id)
        except ApiError as e:
            logger.warning(f"Could not refresh comments for post {self.post.id}: {e}")
            return True

        self.post = refreshed
        self.comments = list(refreshed.comments)
        return True

    def share_url(self, origin: str) -> str:
        return f"{origin.rstrip('/')}/community/post/{self.post.id}"
