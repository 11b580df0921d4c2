from passlib.context import CryptContext
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional
import logging
import jwt

from .config import settings
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TOKEN_TTL_SECONDS = 600

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """A wrong password and an unreadable stored hash both verify as False."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


def dummy_verify() -> None:
    """Spend the cost of one verification when there is no account to check against."""
    pwd_context.dummy_verify()


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str
    organisation_ids: List[str]
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Mints and verifies short-lived HS256 bearer tokens.

    Tokens carry ``{userId, orgIds, iat, exp}``. Nothing is stored server side,
    so a token stays valid until ``exp`` and there is no revocation.
    """

    def __init__(
        self,
        signing_key: str,
        ttl_seconds: int = DEFAULT_ACCESS_TOKEN_TTL_SECONDS,
        algorithm: str = "HS256",
    ):
        if not signing_key:
            raise ValueError("signing_key must not be empty")
        self._signing_key = signing_key
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm

    def issue(
        self,
        subject_id: str,
        organisation_ids: Iterable[str],
        ttl_seconds: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> str:
        issued_at = now or datetime.now(timezone.utc)
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        payload = {
            "userId": subject_id,
            "orgIds": list(organisation_ids),
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=ttl),
        }
        return jwt.encode(payload, self._signing_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises:
            AuthenticationError: for any bad signature, malformed token,
                expired token or missing claim. Callers get no detail.
        """
        try:
            data = jwt.decode(
                token,
                self._signing_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.debug("Token rejected: %s", exc)
            raise AuthenticationError() from exc

        subject_id = data.get("userId")
        organisation_ids = data.get("orgIds")
        if not isinstance(subject_id, str) or not subject_id:
            logger.debug("Token rejected: userId claim missing")
            raise AuthenticationError()
        if not isinstance(organisation_ids, list) or not all(isinstance(o, str) for o in organisation_ids):
            logger.debug("Token rejected: orgIds claim malformed")
            raise AuthenticationError()

        return TokenClaims(
            subject_id=subject_id,
            organisation_ids=organisation_ids,
            issued_at=datetime.fromtimestamp(data["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(data["exp"], tz=timezone.utc),
        )
