"""API key guard for back-office endpoints"""

import secrets
from typing import Optional
from fastapi import Header, Request, status
from libs.result import Error
from src.api.error import ClientError


async def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(default=None),
) -> None:
    config = request.app.state.config
    if config.AUTH_DISABLED:
        return
    if not config.API_KEY or not x_api_key or not secrets.compare_digest(x_api_key, config.API_KEY):
        raise ClientError(
            Error(code="UNAUTHORIZED", message="Invalid or missing API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
