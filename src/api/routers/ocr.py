"""API router for screenshot recognition and field normalization."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from models.schemas import ExtractionResponse, OcrRequest, RawExtractionPayload
from services.extraction import normalize_extraction
from services.recognition import DeviceRecognizer, RecognitionError, RecognitionRateLimited

logger = logging.getLogger(__name__)

router = APIRouter()


def get_recognizer() -> DeviceRecognizer:
    return DeviceRecognizer()


@router.post("", response_model=ExtractionResponse)
async def recognize_screenshot(
    request: OcrRequest,
    recognizer: DeviceRecognizer = Depends(get_recognizer),
) -> ExtractionResponse:
    """
    Recognize a diagnostic-tool screenshot and normalize the readings.

    Args:
        request: Screenshot payload
        recognizer: Vision recognizer

    Returns:
        Normalized fields with warnings for anything that needs a human look

    Raises:
        HTTPException: 400 for an empty image, 429 when the recognizer is
            rate limited, 502 for other recognizer failures
    """
    if not request.image_base64.strip():
        raise HTTPException(
            status_code=400,
            detail={"error": {"code": "IMAGE_REQUIRED", "message": "image_base64 is required"}},
        )

    try:
        raw = await recognizer.recognize(request.image_base64, hint=request.mode)
    except RecognitionRateLimited as e:
        raise HTTPException(
            status_code=429,
            detail={
                "error": {
                    "code": "RATE_LIMIT",
                    "message": str(e),
                    "retry_after_seconds": e.retry_after_seconds,
                }
            },
            headers={"Retry-After": str(e.retry_after_seconds)},
        )
    except ValueError as e:
        raise HTTPException(
            status_code=503,
            detail={"error": {"code": "RECOGNIZER_NOT_CONFIGURED", "message": str(e)}},
        )
    except RecognitionError as e:
        raise HTTPException(
            status_code=502,
            detail={"error": {"code": "RECOGNITION_FAILED", "message": str(e)}},
        )

    result = normalize_extraction(raw)
    return ExtractionResponse(fields=result.data.to_dict(), warnings=result.warnings)


@router.post("/normalize", response_model=ExtractionResponse)
async def normalize_readings(payload: RawExtractionPayload) -> ExtractionResponse:
    """Normalize readings obtained elsewhere, without calling the recognizer."""
    result = normalize_extraction(payload.to_raw())
    return ExtractionResponse(fields=result.data.to_dict(), warnings=result.warnings)
