import logging

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from elevenfortyfour.config.constants import (
    DUPLICATE_MESSAGE,
    INTERNAL_ERROR_MESSAGE,
    STORE_FAILURE_MESSAGE,
    SUCCESS_MESSAGE,
)
from elevenfortyfour.core.exceptions import DuplicateEmailError, InvalidEmailError, WaitlistStoreError
from elevenfortyfour.core.services.waitlist_service import WaitlistService

logger = logging.getLogger("elevenfortyfour.waitlist")

router = APIRouter()


def get_waitlist_service(request: Request) -> WaitlistService:
    """The service built on startup; tests swap it via dependency_overrides."""
    return request.app.state.waitlist_service


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


@router.post("/subscribe")
async def subscribe(request: Request, service: WaitlistService = Depends(get_waitlist_service)):
    """
    Add an email to the waitlist and send a confirmation.

    Missing or non-string email is a 400 with a fixed message, never a 422.
    """
    try:
        payload = await request.json()
        result = await service.join(payload)
    except InvalidEmailError as e:
        return error_response(400, e.reason)
    except DuplicateEmailError as e:
        logger.info(f"Duplicate waitlist signup rejected (code={e.code})")
        return error_response(409, DUPLICATE_MESSAGE)
    except WaitlistStoreError as e:
        logger.error(f"Supabase error: code={e.code} message={e.message} details={e.details}")
        return error_response(500, STORE_FAILURE_MESSAGE)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return error_response(500, INTERNAL_ERROR_MESSAGE)

    return JSONResponse(
        content={"message": SUCCESS_MESSAGE, "data": jsonable_encoder(result.rows)},
        status_code=200
    )
