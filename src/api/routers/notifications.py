"""API router for staff notifications."""

from fastapi import APIRouter, Depends, HTTPException

from models.schemas import ChatworkMessageRequest, ChatworkMessageResponse
from services.notification import ChatworkNotifier, NotificationError, build_assessment_message

router = APIRouter()


def get_notifier() -> ChatworkNotifier:
    return ChatworkNotifier()


@router.post("/chatwork", response_model=ChatworkMessageResponse)
async def send_chatwork_message(
    request: ChatworkMessageRequest,
    notifier: ChatworkNotifier = Depends(get_notifier),
) -> ChatworkMessageResponse:
    """
    Post an assessment request to the staff room.

    Either a prepared ``body`` or the device fields to format one from.
    """
    if request.body:
        body = request.body
    elif request.device:
        body = build_assessment_message(request.device.model_dump())
    else:
        raise HTTPException(
            status_code=400,
            detail={"error": {"code": "MESSAGE_REQUIRED", "message": "body or device is required"}},
        )

    try:
        result = await notifier.post_message(body)
    except NotificationError as e:
        raise HTTPException(
            status_code=502,
            detail={"error": {"code": "NOTIFICATION_FAILED", "message": str(e)}},
        )
    message_id = result.get("message_id")
    return ChatworkMessageResponse(message_id=str(message_id) if message_id is not None else None)
