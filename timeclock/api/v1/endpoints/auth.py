"""
Auth Endpoints - Kiosk PIN clock action and admin login
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from timeclock.db.session import get_db
from timeclock.services.clock_service import ClockService
from timeclock.services.auth_service import AuthService
from timeclock.schemas import (
    ClockRequest,
    ClockResponse,
    AdminLoginRequest,
    TokenResponse,
    DataResponse
)

router = APIRouter()
clock_service = ClockService()
auth_service = AuthService()


def _client_ip(request: Request):
    return request.client.host if request.client else None


# Plain def: bcrypt and DB work run in the threadpool, not on the event loop
@router.post(
    "/kiosk/clock",
    response_model=DataResponse[ClockResponse],
    status_code=status.HTTP_200_OK
)
def kiosk_clock(
    payload: ClockRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Clock in or out with a PIN

    **Authentication:**
    - None, the PIN identifies the employee

    **Process:**
    1. Match the PIN against every employee credential
    2. Read the employee's most recent clock event
    3. No event or last CLOCK_OUT: clock in with a new session id
    4. Last CLOCK_IN: clock out on the same session, recording hours worked
    5. Event and audit entry are committed together

    **Errors:**
    - 401: Invalid PIN provided (audited)
    - 400: Employee removed while the action was processed
    - 500: Storage failure, nothing recorded
    """
    result = clock_service.clock(db, payload.pin, ip_address=_client_ip(request))

    return DataResponse(
        success=True,
        message=result.message,
        data=result
    )


@router.post(
    "/admin/login",
    response_model=DataResponse[TokenResponse],
    status_code=status.HTTP_200_OK
)
def admin_login(
    payload: AdminLoginRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Log into the admin dashboard

    **Response:**
    - Bearer token for the /admin and /maintenance routes

    **Errors:**
    - 401: Unknown email or wrong password
    - 403: User is not an administrator
    """
    token = auth_service.admin_login(db, payload.email, payload.password, ip_address=_client_ip(request))

    return DataResponse(
        success=True,
        message="Login successful",
        data=token
    )
