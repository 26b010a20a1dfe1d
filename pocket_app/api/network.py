from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["network"])


def strip_port(address: str) -> str:
    """
    Drop a trailing ``:port`` from a peer address.

    Handles ``1.2.3.4:80``, ``[::1]:80`` and bare hosts; a bare IPv6
    address (more than one colon, no brackets) is returned unchanged.
    """
    if address.startswith("["):
        return address[1:].split("]", 1)[0]
    if address.count(":") == 1:
        return address.rsplit(":", 1)[0]
    return address


@router.get("/ip", response_class=PlainTextResponse)
def client_ip(request: Request):
    """Echo the caller's address"""
    if request.client is None:
        return ""
    return strip_port(request.client.host)
