from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import Role
from ..core.exceptions import ForbiddenError, UnauthorizedError

# Identity providers place the role claim in different spots depending on
# their token template. Checked in order; the first non-null value wins.
ROLE_CLAIM_PATHS: tuple[tuple[str, ...], ...] = (
    ("publicMetadata", "role"),
    ("public_metadata", "role"),
    ("claims", "role"),
    ("claims", "publicMetadata", "role"),
    ("claims", "public_metadata", "role"),
    ("customClaims", "role"),
    ("customClaims", "publicMetadata", "role"),
    ("customClaims", "public_metadata", "role"),
)


@dataclass(frozen=True)
class Identity:
    """Resolved caller identity.

    `subject` is the provider's stable user id; `claims` is the decoded token payload.
    """

    subject: str
    claims: Mapping[str, Any] = field(default_factory=dict)

    @property
    def role(self) -> Optional[str]:
        return resolve_role(self.claims)


def _dig(claims: Mapping[str, Any], path: tuple[str, ...]) -> Any:
    node: Any = claims
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def resolve_role(claims: Mapping[str, Any]) -> Optional[str]:
    for path in ROLE_CLAIM_PATHS:
        value = _dig(claims, path)
        if value is not None:
            return value
    return None


def require_identity(caller: Optional[Identity]) -> Identity:
    if caller is None or not caller.subject:
        raise UnauthorizedError()
    return caller


def require_admin(caller: Optional[Identity]) -> Identity:
    caller = require_identity(caller)
    role = caller.role
    if role != Role.ADMIN.value:
        raise ForbiddenError(role)
    return caller
