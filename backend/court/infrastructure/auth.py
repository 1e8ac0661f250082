"""Principal Resolution — turns a bearer JWT into a Principal.

Invariants:
    - Token must be signed with the configured secret/algorithm and carry
      `role` and `name` plus a subject: `sub`, or `id` as signed by the
      login service (its payload is {id, role, name})
    - `role` must name a known Role
    - Any failure raises AuthenticationError; the reason is logged, never returned

Design Decisions:
    - Verification only: tokens are issued by the identity service, not here
    - python-jose for JWT decoding (same library the VeriCase API uses)
"""

import logging

from jose import JWTError, jwt

from court.core.domain_types import Principal, PrincipalId, Role
from court.core.errors import AuthenticationError

logger = logging.getLogger(__name__)


def decode_principal(
    token: str, secret: str, algorithm: str = "HS256", issuer: str | None = None,
) -> Principal:
    """Verify `token` and build the Principal it asserts."""
    options = {"verify_iss": issuer is not None}
    try:
        payload = jwt.decode(
            token, secret, algorithms=[algorithm], issuer=issuer, options=options,
        )
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise AuthenticationError("Invalid or expired token")

    subject = payload.get("sub") or payload.get("id")
    name = payload.get("name")
    if not subject or not name:
        raise AuthenticationError("Token is missing required claims")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        logger.warning(f"Token carries unknown role: {payload.get('role')!r}")
        raise AuthenticationError("Token carries an unknown role")
    return Principal(id=PrincipalId(str(subject)), role=role, name=str(name))
