import logging
from typing import List, Optional, Set

from app.client.api_client import ApiError, PetoraClient
from app.client.notifications import Notifier
from app.client.optimistic import OptimisticState
from app.client.polling import SingleFlightPoller
from app.client.viewer import Viewer
from app.config.settings import settings
from app.core.serialization import utc_now
from app.modules.groups.schemas import GroupResponse, GroupWithMessagesResponse, MessageResponse

logger = logging.getLogger(__name__)

LOADING = "loading"
READY = "ready"
NOT_FOUND = "not_found"
ERROR = "error"


class GroupChatView:
    """
    Chat room for one community group.

    Starts in ``loading`` and moves to ``ready`` after the first successful
    fetch. While ready it re-fetches on a fixed interval; every fetch replaces
    the message list wholesale.
    """

    def __init__(
        self,
        api: PetoraClient,
        group_id: str,
        viewer: Optional[Viewer] = None,
        notifier: Optional[Notifier] = None,
        poll_interval: float = None,
    ):
        self.api = api
        self.group_id = group_id
        self.viewer = viewer
        self.notifier = notifier or Notifier()
        self.status = LOADING
        self.group: Optional[GroupResponse] = None
        self.draft = ""
        self.is_joining = False
        self._messages: OptimisticState[List[MessageResponse]] = OptimisticState([])
        self._temp_ids: Set[str] = set()
        self.poller = SingleFlightPoller(
            fetch=lambda: self.api.get_group(self.group_id),
            apply=self._apply,
            interval=poll_interval or settings.chat_poll_interval_seconds,
            on_error=self._on_fetch_error,
        )

    @property
    def messages(self) -> List[MessageResponse]:
        return self._messages.value

    @property
    def is_member(self) -> bool:
        return bool(self.viewer and self.group and self.viewer.user_id in self.group.member_ids)

    @property
    def is_owner(self) -> bool:
        return bool(self.viewer and self.group and self.group.owner_id == self.viewer.user_id)

    @property
    def can_post(self) -> bool:
        return self.is_member or self.is_owner

    @property
    def can_join(self) -> bool:
        return bool(self.viewer and self.group) and not self.can_post

    def is_pending(self, message: MessageResponse) -> bool:
        return message.id in self._temp_ids

    def _apply(self, data: GroupWithMessagesResponse) -> None:
        self.group = data.group
        self._messages.replace(list(data.messages))
        self._temp_ids.clear()
        self.status = READY

    def _on_fetch_error(self, error: Exception) -> None:
        if self.status != LOADING:
            return
        if isinstance(error, ApiError) and error.is_not_found:
            self.status = NOT_FOUND
        else:
            self.status = ERROR
            self.notifier.error("Could not load group")

    async def load(self) -> bool:
        return await self.poller.fetch_now()

    async def start(self) -> None:
        await self.load()
        if self.status == READY:
            self.poller.start()

    async def stop(self) -> None:
        await self.poller.stop()

    async def join(self) -> bool:
        if not self.viewer or not self.group:
            self.notifier.error("You must be logged in to join")
            return False

        self.is_joining = True
        try:
            await self.api.join_group(self.group.id, self.viewer.user_id)
        except ApiError as e:
            logger.error(f"Error joining group {self.group_id}: {e}")
            self.notifier.error("Failed to join group")
            return False
        finally:
            self.is_joining = False

        member_ids = list(self.group.member_ids)
        if self.viewer.user_id not in member_ids:
            member_ids.append(self.viewer.user_id)
        self.group = self.group.model_copy(update={"member_ids": member_ids, "members": len(member_ids)})
        self.notifier.notify(
            f"Welcome to {self.group.name}!",
            "You have successfully joined the group.",
        )
        return True

    async def send(self, text: str = None) -> bool:
        text = self.draft if text is None else text
        if not self.viewer:
            self.notifier.error("You must be logged in to chat")
            return False
        if not text.strip() or not self.group or not self.can_post:
            return False

        now = utc_now()
        temp_id = f"temp-{int(now.timestamp() * 1000)}-{len(self._temp_ids)}"
        optimistic = MessageResponse(
            id=temp_id,
            group_id=self.group.id,
            user=self.viewer.display_name,
            user_id=self.viewer.user_id,
            message=text,
            avatar=self.viewer.avatar,
            created_at=now,
        )
        self._temp_ids.add(temp_id)
        self.draft = ""

        try:
            await self._messages.run(
                forward=lambda messages: messages + [optimistic],
                inverse=lambda messages: [m for m in messages if m.id != temp_id],
                request=lambda: self.api.send_message(
                    self.group.id,
                    user=self.viewer.display_name,
                    user_id=self.viewer.user_id,
                    message=text,
                    avatar=self.viewer.avatar,
                ),
            )
        except ApiError as e:
            logger.error(f"Error sending message to group {self.group_id}: {e}")
            self._temp_ids.discard(temp_id)
            self.notifier.error("Failed to send message")
            return False

        await self.poller.fetch_now()
        return True
