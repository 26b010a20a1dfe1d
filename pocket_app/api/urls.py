from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, RedirectResponse

from pocket_app.dependencies import ANY_METHOD, get_tag_store, parse_payload, require_post
from pocket_app.errors import BadRequest, DuplicateTag, NotFound, StorageFailure
from pocket_app.schemas.payloads import SaveURLRequest
from pocket_app.security.auth import require_shared_secret
from pocket_app.storage.strategies import TagStore

router = APIRouter(tags=["urls"])


@router.api_route(
    "/puturl",
    methods=ANY_METHOD,
    response_class=PlainTextResponse,
    dependencies=[Depends(require_shared_secret), Depends(require_post)],
)
async def save_url(request: Request, store: TagStore = Depends(get_tag_store)):
    """Store a tag -> URL mapping (shared secret required)"""
    payload = await parse_payload(request, SaveURLRequest)

    # Store calls are blocking I/O; keep them off the event loop
    try:
        await run_in_threadpool(store.save, payload.tag, payload.url)
    except (DuplicateTag, StorageFailure) as e:
        return PlainTextResponse(f"Failed to save data: {e.message}", status_code=e.status_code)

    return "success"


@router.get("/geturl")
def retrieve_url(tag: str = "", store: TagStore = Depends(get_tag_store)):
    """Redirect to the URL saved under ``tag``"""
    if not tag:
        raise BadRequest("Tag is required")

    try:
        url = store.lookup(tag)
    except NotFound:
        return PlainTextResponse(
            "No URL found for the given tag",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except StorageFailure as e:
        return PlainTextResponse(f"Failed to retrieve data: {e.message}", status_code=e.status_code)

    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
