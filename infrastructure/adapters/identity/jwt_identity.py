import logging
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from domain.ports.identity import IdentityPort


class JWTIdentityAdapter(IdentityPort):
    """
    Verifies access tokens issued by the hosted auth server.

    Tokens are HS256-signed with the project JWT secret; the user id is the
    ``sub`` claim.
    """

    def __init__(self, secret: str, audience: Optional[str] = "authenticated", algorithm: str = "HS256"):
        self.secret = secret
        self.audience = audience
        self.algorithm = algorithm
        self.logger = logging.getLogger(__name__)

    def resolve_user_id(self, access_token: str) -> Optional[UUID]:
        if not self.secret:
            self.logger.error("JWT secret is not configured; rejecting token")
            return None

        try:
            claims = jwt.decode(
                access_token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
            )
        except JWTError as e:
            self.logger.info(f"Rejected access token: {e}")
            return None

        try:
            return UUID(str(claims.get("sub")))
        except ValueError:
            return None
