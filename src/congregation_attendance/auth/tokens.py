from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from jose import JWTError, jwt

from ..common.logging import get_logger
from .identity import Identity

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenSettings:
    key: str
    algorithms: Sequence[str] = ("HS256",)
    audience: Optional[str] = None
    issuer: Optional[str] = None


class TokenDecoder:
    """Turn an `Authorization` header into an Identity (or None)."""

    def __init__(self, settings: TokenSettings):
        self._settings = settings

    def decode(self, token: str) -> Optional[Identity]:
        options = {"verify_aud": self._settings.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self._settings.key,
                algorithms=list(self._settings.algorithms),
                audience=self._settings.audience,
                issuer=self._settings.issuer,
                options=options,
            )
        except JWTError as e:
            logger.info("Rejected bearer token: %s", e)
            return None

        subject = payload.get("sub")
        if not subject:
            return None
        return Identity(subject=str(subject), claims=payload)

    def from_header(self, header_value: Optional[str]) -> Optional[Identity]:
        if not header_value:
            return None
        scheme, _, token = header_value.strip().partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return self.decode(token.strip())
