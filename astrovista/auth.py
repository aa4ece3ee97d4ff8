"""API-key authentication for the ingest endpoint."""

import secrets
from typing import Protocol

from fastapi import Request

from astrovista.errors import AuthError

API_KEY_HEADER = "x-api-key"


class ApiKeyVerifier(Protocol):
    def verify(self, key: str | None) -> bool: ...


class StaticKeyVerifier:
    """Accepts exactly one configured secret. An empty secret accepts nothing."""

    def __init__(self, secret: str):
        self._secret = secret

    def verify(self, key: str | None) -> bool:
        if not self._secret or not key:
            return False
        return secrets.compare_digest(key.encode("utf-8"), self._secret.encode("utf-8"))


async def require_api_key(request: Request) -> str:
    """FastAPI dependency: check x-api-key against the app's verifier.

    Returns the accepted key so the handler can reuse it upstream.
    """
    key = request.headers.get(API_KEY_HEADER)
    verifier: ApiKeyVerifier = request.app.state.key_verifier
    if not verifier.verify(key):
        raise AuthError()
    return key
