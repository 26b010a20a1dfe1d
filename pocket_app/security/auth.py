"""
Shared-secret authorization for mutating routes.
"""

import logging
from typing import Optional

from fastapi import Request

from pocket_app.config import GeneralSettings
from pocket_app.errors import Unauthorized

logger = logging.getLogger(__name__)


class AuthGate:
    """
    Single shared-secret check.

    The caller either presents the configured secret in the configured
    header or is rejected; there are no users, sessions or expiry.
    """

    def __init__(self, header_name: str, secret: str):
        self.header_name = header_name
        self.secret = secret

    @classmethod
    def from_settings(cls, general: GeneralSettings) -> "AuthGate":
        return cls(header_name=general.authheader, secret=general.secret)

    def authorize(self, presented: Optional[str]) -> None:
        """
        Raise ``Unauthorized`` unless ``presented`` equals the secret.

        Plain string equality, case-sensitive.
        """
        if not presented:
            raise Unauthorized()
        if presented != self.secret:
            raise Unauthorized()


def require_shared_secret(request: Request) -> None:
    """FastAPI dependency guarding the gated routes"""
    gate: AuthGate = request.app.state.auth_gate
    try:
        gate.authorize(request.headers.get(gate.header_name))
    except Unauthorized:
        client = request.client.host if request.client else "unknown"
        logger.warning("Rejected %s %s from %s", request.method, request.url.path, client)
        raise
