from unittest.mock import AsyncMock, patch

import httpx
import pytest

from services.notification import ChatworkNotifier, NotificationError, build_assessment_message


def _response(status_code=200, json_body=None, text=""):
    request = httpx.Request("POST", "https://api.chatwork.example/v2/rooms/1/messages")
    if json_body is not None:
        return httpx.Response(status_code, json=json_body, request=request)
    return httpx.Response(status_code, text=text, request=request)


def test_build_message_with_all_fields():
    body = build_assessment_message(
        {
            "model_name": "iPhone 13",
            "capacity": "128GB",
            "imei": "490154203237518",
            "condition": "B",
            "battery": "88%",
            "notes": "画面に小傷",
        }
    )

    assert body.splitlines() == [
        "【査定依頼】",
        "iPhone 13 128GB",
        "IMEI：490154203237518",
        "状態：B",
        "バッテリー：88%",
        "特記事項：画面に小傷",
    ]


def test_build_message_defaults():
    lines = build_assessment_message({}).splitlines()

    assert lines[1] == ""
    assert lines[3] == "状態：N/A"
    assert lines[4] == "バッテリー：N/A"
    assert lines[5] == "特記事項：なし"


@pytest.mark.asyncio
async def test_post_message_sends_token_and_body():
    notifier = ChatworkNotifier(api_token="tok", room_id="42", api_base="https://api.chatwork.example/v2")

    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(json_body={"message_id": "1234"})
        result = await notifier.post_message("hello")

    assert result == {"message_id": "1234"}
    assert mock_post.call_args.args[0] == "https://api.chatwork.example/v2/rooms/42/messages"
    assert mock_post.call_args.kwargs["headers"] == {"X-ChatWorkToken": "tok"}
    assert mock_post.call_args.kwargs["data"] == {"body": "hello"}


@pytest.mark.asyncio
async def test_post_message_error_status():
    notifier = ChatworkNotifier(api_token="tok", room_id="42")

    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(status_code=401, text="unauthorized")
        with pytest.raises(NotificationError, match="401"):
            await notifier.post_message("hello")


@pytest.mark.asyncio
async def test_post_message_requires_configuration(monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "chatwork_api_token", None)
    monkeypatch.setattr(settings, "chatwork_room_id", None)

    with pytest.raises(NotificationError, match="configured"):
        await ChatworkNotifier().post_message("hello")
