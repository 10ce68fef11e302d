import json

import httpx
import pytest

from elevenfortyfour.core.exceptions import ConfigurationError, NotificationError
from elevenfortyfour.core.models.waitlist import EmailMessage
from elevenfortyfour.core.services.notifier import ResendNotifier

MESSAGE = EmailMessage(
    sender="Admin @ 11:34 <admin@1134.world>",
    to="alice@test.com",
    subject="You're on the list",
    html="<p>Hi</p>",
    text="Hi",
)


def test_missing_api_key_fails_on_construction():
    with pytest.raises(ConfigurationError):
        ResendNotifier(None)
    with pytest.raises(ConfigurationError):
        ResendNotifier("")


@pytest.mark.asyncio
async def test_send_posts_payload_with_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "49a3999c"})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    notifier = ResendNotifier("re_test", client=client)

    result = await notifier.send(MESSAGE)
    await notifier.close()

    assert result == {"id": "49a3999c"}
    assert seen["url"] == "https://api.resend.com/emails"
    assert seen["auth"] == "Bearer re_test"
    assert seen["body"] == {
        "from": "Admin @ 11:34 <admin@1134.world>",
        "to": "alice@test.com",
        "subject": "You're on the list",
        "html": "<p>Hi</p>",
        "text": "Hi",
    }


@pytest.mark.asyncio
async def test_text_is_omitted_when_empty():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "1"})

    notifier = ResendNotifier("re_test", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    await notifier.send(MESSAGE.model_copy(update={"text": None}))

    assert "text" not in seen["body"]


@pytest.mark.asyncio
async def test_api_rejection_raises_notification_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "The domain is not verified"})

    notifier = ResendNotifier("re_test", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    with pytest.raises(NotificationError) as exc:
        await notifier.send(MESSAGE)
    assert "403" in str(exc.value)


@pytest.mark.asyncio
async def test_network_failure_raises_notification_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    notifier = ResendNotifier("re_test", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    with pytest.raises(NotificationError):
        await notifier.send(MESSAGE)
