from functools import lru_cache
from typing import Optional
import logging

from fastapi import Depends, Header

from .auth import TokenClaims, TokenService
from .config import settings
from .errors import AuthenticationError

logger = logging.getLogger(__name__)


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service, built once from settings."""
    if settings.uses_insecure_signing_key:
        logger.warning("JWT_SECRET_KEY is not set; using the insecure development signing key")
    return TokenService(
        signing_key=settings.JWT_SECRET_KEY,
        ttl_seconds=settings.ACCESS_TOKEN_TTL_SECONDS,
        algorithm=settings.JWT_ALGORITHM,
    )


def get_current_claims(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthenticationError()
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError()
    return tokens.verify(token)
