"""
FastAPI application factory.

Every collaborator is passed in: the bootstrap builds them from the loaded
settings, tests build their own.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pocket_app.api import network, notify, urls
from pocket_app.config import Settings
from pocket_app.errors import RequestError
from pocket_app.security.auth import AuthGate
from pocket_app.services.notification import NotificationRelay, SMTPNotificationRelay
from pocket_app.storage.strategies import TagStore

logger = logging.getLogger(__name__)

APP_NAME = "Pocket Server"
APP_VERSION = "1.0.0"


async def request_error_handler(request: Request, exc: RequestError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and wrong methods get plain text like everything else
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(
    settings: Settings,
    tag_store: TagStore,
    notification_relay: Optional[NotificationRelay] = None,
    auth_gate: Optional[AuthGate] = None,
) -> FastAPI:
    """
    Build the application with its collaborators attached to ``app.state``.

    Args:
        settings: Loaded, validated settings
        tag_store: Store backing /puturl and /geturl
        notification_relay: Relay for /notify (defaults to SMTP from settings)
        auth_gate: Gate for mutating routes (defaults to the configured secret)
    """
    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.tag_store = tag_store
    app.state.notification_relay = notification_relay or SMTPNotificationRelay(settings.smtp)
    app.state.auth_gate = auth_gate or AuthGate.from_settings(settings.general)

    app.add_exception_handler(RequestError, request_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    ######## Include routers
    app.include_router(network.router)
    app.include_router(notify.router)
    app.include_router(urls.router)

    logger.debug("Application created (auth header %r)", app.state.auth_gate.header_name)
    return app
