# elevenfortyfour/api/main.py
import os
import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from elevenfortyfour.api.routes import waitlist_routes
from elevenfortyfour.config import logging_config
from elevenfortyfour.config.constants import INTERNAL_ERROR_MESSAGE
from elevenfortyfour.config.settings import Settings, cors_origins_from_env
from elevenfortyfour.core.services.notifier import ResendNotifier
from elevenfortyfour.core.services.waitlist_service import WaitlistService
from elevenfortyfour.core.services.waitlist_store import WaitlistStore
from elevenfortyfour.core.utils.email_utils import ConfirmationEmailTemplate

# Load environment variables
load_dotenv()

# Setup logging first, before anything else
logging_config.setup_logging(os.getenv("LOG_DIR"))
logger = logging.getLogger("elevenfortyfour.api")

logger.info("Initializing FastAPI application")

app = FastAPI(title="11:34", redirect_slashes=False)

app.add_middleware(
    CORSMiddleware,
    # Configured at import, before startup builds Settings
    allow_origins=cors_origins_from_env(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(waitlist_routes.router, prefix="/api", tags=["waitlist"])


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(content={"error": INTERNAL_ERROR_MESSAGE}, status_code=500)


@app.get("/")
async def read_root():
    return {"Hello": "World"}


@app.get("/health")
async def health():
    return {"status": "ok"}


async def build_waitlist_service(settings: Settings) -> WaitlistService:
    """
    Construct the process-wide clients from settings.

    The notifier and template are built before the Supabase client so a
    missing RESEND_API_KEY or sender address fails without any network call.
    """
    notifier = ResendNotifier(settings.resend_api_key)
    template = ConfirmationEmailTemplate(
        settings.email_template,
        sender=settings.email_from,
        subject=settings.email_subject,
        site_url=settings.site_url,
    )
    store = await WaitlistStore.connect(
        settings.supabase_url, settings.supabase_key, table=settings.waitlist_table
    )
    return WaitlistService(store, notifier, template)


@app.on_event("startup")
async def startup_event():
    try:
        settings = Settings.from_env()
        app.state.waitlist_service = await build_waitlist_service(settings)
        logger.info(
            f"Waitlist service ready (table={settings.waitlist_table}, template={settings.email_template})"
        )
    except Exception as e:
        logger.error(f"Startup error: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    service = getattr(app.state, "waitlist_service", None)
    if service is not None:
        await service.notifier.close()
    logger.info("Application shutdown complete")


def start():
    logger.info("Starting FastAPI server on 0.0.0.0:8000")
    # Use import string for reload support; RELOAD=1 enables it for local development
    uvicorn.run("elevenfortyfour.api.main:app", host="0.0.0.0", port=8000, reload=os.getenv("RELOAD") == "1")


if __name__ == "__main__":
    start()
