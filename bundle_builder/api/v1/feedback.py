"""
Feedback API endpoints
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from bundle_builder.api.dependencies import get_feedback_service
from bundle_builder.core.exceptions import DatabaseError, ValidationError
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.feedback import FeedbackService

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["feedback"])


@router.post("/feedback")
async def save_feedback(
    body: Any = Body(None),
    service: FeedbackService = Depends(get_feedback_service),
):
    """Store a thumbs-up ("good") or thumbs-down ("bad") from the merchant"""
    feedback_type = body.get("type") if isinstance(body, dict) else None

    try:
        await service.record(feedback_type)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"message": e.message})
    except DatabaseError as e:
        logger.error("Error saving feedback", error=str(e.cause or e))
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to save feedback", "error": e.message},
        )

    return {"message": "Feedback saved successfully"}
