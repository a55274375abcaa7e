"""
JWT Service for admin bearer token generation and validation
"""
import jwt
import uuid
from datetime import timedelta
from typing import Dict, Any, Tuple

from atams.exceptions import UnauthorizedException

from timeclock.core.config import settings
from timeclock.core.timeutils import utcnow

TOKEN_ISSUER = "timeclock"


class JwtService:
    def __init__(self) -> None:
        self.secret = settings.ADMIN_JWT_SECRET
        self.algorithm = settings.ADMIN_JWT_ALG
        self.expire_minutes = settings.ADMIN_TOKEN_EXPIRE_MINUTES

    def generate_admin_token(self, user) -> Tuple[str, int]:
        """
        Generate signed token for the admin dashboard

        Returns:
            tuple: (token, expires_in seconds)
        """
        now = utcnow()
        expires_in = self.expire_minutes * 60
        exp = now + timedelta(seconds=expires_in)

        payload = {
            "iss": TOKEN_ISSUER,
            "sub": user.u_email,
            "uid": user.u_id,
            "role": user.u_role,
            "jti": str(uuid.uuid4()),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp())
        }

        token = jwt.encode(payload, self.secret, algorithm=self.algorithm)
        return token, expires_in

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode admin bearer token

        Raises:
            UnauthorizedException: If token is invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=TOKEN_ISSUER,
                options={"require": ["iss", "sub", "uid", "role", "iat", "exp"]}
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedException("Token expired")
        except jwt.InvalidTokenError as e:
            raise UnauthorizedException(f"Invalid token: {str(e)}")

        return payload
