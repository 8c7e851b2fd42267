import asyncio
from datetime import datetime, timedelta, timezone

from app.client.api_client import ApiError
from app.modules.groups.schemas import (
    GroupJoinResponse, GroupResponse, GroupWithMessagesResponse,
    MessageInsertResponse, MessageResponse
)
from app.modules.pets.schemas import PetResponse
from app.modules.posts.schemas import (
    CommentAddedResponse, CommentResponse, LikeResponse, PostResponse
)

GROUP_ID = "64f0c0ffee0000000000ab01"
POST_ID = "64f0c0ffee0000000000cd02"
BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_message(n, user_id="u2"):
    return MessageResponse(
        id=f"m{n}", group_id=GROUP_ID, user="Sam", user_id=user_id,
        message=f"message {n}", created_at=BASE_TIME + timedelta(seconds=n),
    )


class FakeApi:
    """In-memory stand-in for PetoraClient"""

    def __init__(self):
        self.group = GroupResponse(
            id=GROUP_ID, name="Beagle Buddies", members=1,
            member_ids=["owner-1"], owner_id="owner-1",
        )
        self.messages = [make_message(1)]
        self.post = PostResponse(id=POST_ID, author="Priya", content="hi", likes=[], comments=[])
        self.pet = None
        self.fail = set()
        self.not_found = set()
        self.calls = []
        self.gates = {}

    async def _enter(self, name):
        self.calls.append(name)
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if name in self.not_found:
            raise ApiError(404, "Not found")
        if name in self.fail:
            raise ApiError(500, "Internal server error")

    def hold(self, name):
        self.gates[name] = asyncio.Event()
        return self.gates[name]

    async def get_group(self, group_id):
        await self._enter("get_group")
        return GroupWithMessagesResponse(group=self.group, messages=list(self.messages))

    async def join_group(self, group_id, user_id):
        await self._enter("join_group")
        ids = list(self.group.member_ids)
        if user_id not in ids:
            ids.append(user_id)
        self.group = self.group.model_copy(update={"member_ids": ids, "members": len(ids)})
        return GroupJoinResponse(message="Successfully joined group", members=len(ids))

    async def send_message(self, group_id, user, user_id, message, avatar=None):
        await self._enter("send_message")
        stored = MessageResponse(
            id=f"m{len(self.messages) + 1}", group_id=group_id, user=user, user_id=user_id,
            message=message, avatar=avatar, created_at=BASE_TIME + timedelta(minutes=5),
        )
        self.messages.append(stored)
        return MessageInsertResponse(acknowledged=True, inserted_id=stored.id)

    async def get_post(self, post_id):
        await self._enter("get_post")
        return self.post

    async def like_post(self, post_id, user_id):
        await self._enter("like_post")
        likes = list(self.post.likes)
        liked = user_id not in likes
        likes = likes + [user_id] if liked else [u for u in likes if u != user_id]
        self.post = self.post.model_copy(update={"likes": likes})
        return LikeResponse(message="ok", liked=liked, likes=len(likes))

    async def comment_on_post(self, post_id, user_id, author, text, avatar=None):
        await self._enter("comment_on_post")
        new = CommentResponse(
            id=f"c{len(self.post.comments) + 1}", author=author, author_id=user_id,
            avatar=avatar, comment=text, created_at=BASE_TIME + timedelta(hours=1),
        )
        self.post = self.post.model_copy(update={"comments": self.post.comments + [new]})
        return CommentAddedResponse(message="Comment added", comment=new)

    async def get_pet(self, pet_id):
        await self._enter("get_pet")
        return self.pet


def make_pet(**fields):
    data = {"id": "64f0c0ffee0000000000ef03", "name": "Bella", "listing_type": "Sale"}
    data.update(fields)
    return PetResponse(**data)
