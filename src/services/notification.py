"""Outbound assessment notifications to the Chatwork room."""

import logging
from typing import Any, Mapping, Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    pass


def build_assessment_message(device: Mapping[str, Any]) -> str:
    """Format an assessment request the way staff read it in the room."""
    heading = f"{device.get('model_name') or ''} {device.get('capacity') or ''}".strip()
    lines = [
        "【査定依頼】",
        heading,
        f"IMEI：{device.get('imei') or ''}",
        f"状態：{device.get('condition') or 'N/A'}",
        f"バッテリー：{device.get('battery') or 'N/A'}",
        f"特記事項：{device.get('notes') or 'なし'}",
    ]
    return "\n".join(lines)


class ChatworkNotifier:
    def __init__(
        self,
        api_token: Optional[str] = None,
        room_id: Optional[str] = None,
        api_base: Optional[str] = None,
    ):
        self.api_token = api_token or settings.chatwork_api_token
        self.room_id = room_id or settings.chatwork_room_id
        self.api_base = (api_base or settings.chatwork_api_base).rstrip("/")

    async def post_message(self, body: str) -> dict:
        if not self.api_token or not self.room_id:
            raise NotificationError("Chatwork token and room id must be configured")

        url = f"{self.api_base}/rooms/{self.room_id}/messages"
        headers = {"X-ChatWorkToken": self.api_token}
        async with httpx.AsyncClient(timeout=30.0) as client:
            try:
                response = await client.post(url, data={"body": body}, headers=headers)
            except httpx.HTTPError as e:
                logger.error(f"Chatwork request failed: {e}")
                raise NotificationError(str(e)) from e

        if response.status_code >= 400:
            logger.error(f"Chatwork error: {response.status_code} {response.text}")
            raise NotificationError(f"Chatwork error: {response.status_code} {response.text}")
        return response.json()
