"""
API Dependencies
Admin authentication via locally issued bearer tokens
"""
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from atams.exceptions import UnauthorizedException, ForbiddenException

from timeclock.db.session import get_db
from timeclock.repositories.user_repository import UserRepository
from timeclock.services.jwt_service import JwtService
from timeclock.core.enums import Role

security = HTTPBearer(auto_error=False)
jwt_service = JwtService()
user_repo = UserRepository()


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> dict:
    """
    Require a valid admin token whose user still exists with role ADMIN

    Returns:
        dict: user_id, email, role
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Not authenticated")

    payload = jwt_service.verify_token(credentials.credentials)

    user = user_repo.get(db, payload["uid"])
    if user is None:
        raise UnauthorizedException("User no longer exists")
    if user.u_role != Role.ADMIN.value:
        raise ForbiddenException("Administrator privileges required")

    return {
        "user_id": user.u_id,
        "email": user.u_email,
        "role": user.u_role
    }
