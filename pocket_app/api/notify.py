from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from pocket_app.dependencies import ANY_METHOD, get_notification_relay, parse_payload, require_post
from pocket_app.errors import BadRequest, RelayFailure
from pocket_app.schemas.payloads import NotifyRequest
from pocket_app.security.auth import require_shared_secret
from pocket_app.services.notification import NotificationRelay

router = APIRouter(tags=["notify"])


@router.api_route(
    "/notify",
    methods=ANY_METHOD,
    response_class=PlainTextResponse,
    dependencies=[Depends(require_shared_secret), Depends(require_post)],
)
async def relay_notification(
    request: Request,
    relay: NotificationRelay = Depends(get_notification_relay),
):
    """Forward a notification to the configured mail relay"""
    payload = await parse_payload(request, NotifyRequest)
    if not payload.level or not payload.body:
        raise BadRequest("Invalid request body")

    try:
        await relay.send(payload.level, payload.body)
    except RelayFailure as e:
        return PlainTextResponse(f"RequestFailed: {e.message}", status_code=e.status_code)

    return "success"
