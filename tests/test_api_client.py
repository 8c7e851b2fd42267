import asyncio

import aiohttp
import pytest
from fakes import GROUP_ID, POST_ID, FakeApi

from app.client.api_client import ApiError, PetoraClient
from app.client.group_chat import READY, GroupChatView
from app.client.post_card import PostCardView
from app.client.viewer import Viewer

OWNER = Viewer(user_id="owner-1", display_name="Olive")


class FakeResponse:
    def __init__(self, status, payload, reason="OK"):
        self.status = status
        self.reason = reason
        self._payload = payload

    async def json(self, content_type=None):
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class StalledRequest:
    async def __aenter__(self):
        raise asyncio.TimeoutError()

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Answers GETs from a table; every other method times out"""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.requests = []

    def request(self, method, url, json=None):
        self.requests.append((method, url))
        if method == "GET" and url in self.responses:
            status, payload = self.responses[url]
            return FakeResponse(status, payload)
        return StalledRequest()


def test_timeout_becomes_api_error():
    client = PetoraClient(base_url="http://api.test", session=FakeSession())
    with pytest.raises(ApiError) as excinfo:
        asyncio.run(client.get_pet("64f0c0ffee0000000000ef03"))
    assert excinfo.value.status is None
    assert not excinfo.value.is_not_found


def test_connection_error_becomes_api_error():
    class RefusingSession:
        def request(self, method, url, json=None):
            raise aiohttp.ClientConnectionError("connection refused")

    client = PetoraClient(base_url="http://api.test", session=RefusingSession())
    with pytest.raises(ApiError) as excinfo:
        asyncio.run(client.get_post(POST_ID))
    assert excinfo.value.detail == "connection refused"


def test_error_status_carries_detail():
    url = f"http://api.test/groups/{GROUP_ID}"
    session = FakeSession({url: (404, {"detail": "Group not found"})})
    client = PetoraClient(base_url="http://api.test/", session=session)
    with pytest.raises(ApiError) as excinfo:
        asyncio.run(client.get_group(GROUP_ID))
    assert excinfo.value.is_not_found
    assert excinfo.value.detail == "Group not found"


def test_like_timeout_rolls_back_and_notifies():
    client = PetoraClient(base_url="http://api.test", session=FakeSession())
    post = FakeApi().post
    view = PostCardView(client, post, viewer=OWNER)

    assert asyncio.run(view.toggle_like()) is False
    assert (view.is_liked, view.like_count) == (False, 0)
    assert view.notifier.last.title == "Something went wrong."


def test_send_timeout_rolls_back_and_notifies():
    fake = FakeApi()
    url = f"http://api.test/groups/{GROUP_ID}"
    payload = {
        "group": fake.group.model_dump(mode="json", by_alias=True),
        "messages": [m.model_dump(mode="json", by_alias=True) for m in fake.messages],
    }
    session = FakeSession({url: (200, payload)})
    view = GroupChatView(PetoraClient(base_url="http://api.test", session=session), GROUP_ID, viewer=OWNER)

    async def scenario():
        await view.load()
        return await view.send("anyone walking today?")

    assert asyncio.run(scenario()) is False
    assert view.status == READY
    assert [m.id for m in view.messages] == ["m1"]
    assert not any(view.is_pending(m) for m in view.messages)
    assert view.notifier.last.title == "Failed to send message"
    assert session.requests[-1] == ("POST", f"{url}/messages")
