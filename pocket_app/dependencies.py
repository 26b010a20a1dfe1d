"""
FastAPI dependencies for dependency injection.

The store, relay and auth gate are built once by the bootstrap and attached
to ``app.state`` by ``create_app``; routes pull them from there instead of
from module globals, so tests can hand the app their own instances.
"""

from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from pocket_app.errors import BadRequest, MethodNotAllowed
from pocket_app.services.notification import NotificationRelay
from pocket_app.storage.strategies import TagStore

PayloadT = TypeVar("PayloadT", bound=BaseModel)

# Gated routes accept every method so the secret is checked before the method
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_tag_store(request: Request) -> TagStore:
    return request.app.state.tag_store


def get_notification_relay(request: Request) -> NotificationRelay:
    return request.app.state.notification_relay


def require_post(request: Request) -> None:
    """Reject non-POST calls; listed after the auth dependency on gated routes"""
    if request.method != "POST":
        raise MethodNotAllowed()


async def parse_payload(request: Request, schema: Type[PayloadT]) -> PayloadT:
    """
    Parse the raw request body as JSON into ``schema``.

    Any decoding or shape problem is a ``BadRequest`` (400), not FastAPI's
    default 422.
    """
    raw = await request.body()
    try:
        return schema.model_validate_json(raw)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        detail = f"{location}: {error['msg']}" if location else error["msg"]
        raise BadRequest(f"Invalid request body: {detail}") from e
