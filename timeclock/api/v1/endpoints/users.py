"""
User Endpoints - Admin management of employees and administrators
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from timeclock.db.session import get_db
from timeclock.services.user_service import UserService
from timeclock.schemas import (
    User,
    UserCreate,
    ResetPinRequest,
    DataResponse
)
from timeclock.api.deps import require_admin
from timeclock.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
user_service = UserService()


@router.get(
    "",
    status_code=status.HTTP_200_OK
)
async def list_users(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    List all users

    **Authorization:**
    - Requires admin bearer token
    """
    users = user_service.list_users(db)

    response = DataResponse(
        success=True,
        message="Users retrieved successfully",
        data=users
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/statuses",
    status_code=status.HTTP_200_OK
)
async def get_user_statuses(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Current clock status of every user

    **Response:**
    - status: "Clocked In", "Clocked Out" or "Never Clocked In"
    - last_action_at: time of the latest clock event, if any
    """
    statuses = user_service.get_user_statuses(db)

    response = DataResponse(
        success=True,
        message="User statuses retrieved successfully",
        data=statuses
    )

    return encrypt_response_data(response, settings)


@router.post(
    "",
    response_model=DataResponse[User],
    status_code=status.HTTP_201_CREATED
)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Create an employee or administrator

    **Errors:**
    - 400: Invalid PIN, or PIN already used by another employee
    - 409: Email already in use
    """
    user = user_service.create_user(db, payload, actor_id=current_user["user_id"])

    return DataResponse(
        success=True,
        message="User created successfully",
        data=user
    )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT
)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Delete a user

    Clock events and audit entries of the user are kept.
    """
    user_service.delete_user(db, user_id, actor_id=current_user["user_id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{user_id}/reset-pin",
    response_model=DataResponse[None],
    status_code=status.HTTP_200_OK
)
def reset_pin(
    user_id: int,
    payload: ResetPinRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Replace a user's PIN or password

    **Errors:**
    - 404: User not found
    - 400: Invalid PIN, or PIN already used by another employee
    """
    user_service.reset_pin(db, user_id, payload.new_pin, actor_id=current_user["user_id"])

    return DataResponse(
        success=True,
        message="PIN reset successfully",
        data=None
    )
