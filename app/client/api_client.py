"""
Async HTTP client for the Petora Connect API.

Responses are parsed into the same schemas the server renders, so the
timestamp and id contract is enforced on both sides of the wire.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from app.config.settings import settings
from app.modules.groups.schemas import (
    GroupJoinResponse, GroupWithMessagesResponse, MessageInsertResponse
)
from app.modules.pets.schemas import PetResponse
from app.modules.posts.schemas import (
    CommentAddedResponse, LikeResponse, PostResponse
)

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response, or a transport failure when status is None."""

    def __init__(self, status: Optional[int], detail: str):
        super().__init__(f"{status}: {detail}" if status else detail)
        self.status = status
        self.detail = detail

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


class PetoraClient:
    def __init__(
        self,
        base_url: str = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout or settings.request_timeout_seconds)

    async def __aenter__(self) -> "PetoraClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def _request(self, method: str, path: str, json: Dict[str, Any] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            async with self._get_session().request(method, url, json=json) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = None
                if response.status >= 400:
                    detail = data.get("detail") if isinstance(data, dict) else None
                    raise ApiError(response.status, detail or response.reason or "Request failed")
                return data
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ApiError(None, str(e) or "Request timed out") from e

    async def get_group(self, group_id: str) -> GroupWithMessagesResponse:
        data = await self._request("GET", f"/groups/{group_id}")
        return GroupWithMessagesResponse.model_validate(data)

    async def join_group(self, group_id: str, user_id: str) -> GroupJoinResponse:
        data = await self._request("PUT", f"/groups/{group_id}/join", {"userId": user_id})
        return GroupJoinResponse.model_validate(data)

    async def send_message(
        self, group_id: str, user: str, user_id: str, message: str, avatar: Optional[str] = None
    ) -> MessageInsertResponse:
        data = await self._request("POST", f"/groups/{group_id}/messages", {
            "user": user,
            "userId": user_id,
            "message": message,
            "avatar": avatar,
        })
        return MessageInsertResponse.model_validate(data)

    async def get_post(self, post_id: str) -> PostResponse:
        data = await self._request("GET", f"/posts/{post_id}")
        return PostResponse.model_validate(data)

    async def like_post(self, post_id: str, user_id: str) -> LikeResponse:
        data = await self._request("PUT", f"/posts/{post_id}", {"action": "like", "userId": user_id})
        return LikeResponse.model_validate(data)

    async def comment_on_post(
        self, post_id: str, user_id: str, author: str, text: str, avatar: Optional[str] = None
    ) -> CommentAddedResponse:
        data = await self._request("PUT", f"/posts/{post_id}", {
            "action": "comment",
            "userId": user_id,
            "comment": {"author": author, "avatar": avatar, "text": text},
        })
        return CommentAddedResponse.model_validate(data)

    async def get_pet(self, pet_id: str) -> PetResponse:
        data = await self._request("GET", f"/pets/{pet_id}")
        return PetResponse.model_validate(data)
