from fastapi import APIRouter
from timeclock.api.v1.endpoints import auth, users, timesheets, audit, maintenance

api_router = APIRouter()

# Register routes
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/admin/users", tags=["Users"])
api_router.include_router(timesheets.router, prefix="/admin/timesheets", tags=["Timesheets"])
api_router.include_router(audit.router, prefix="/admin", tags=["Audit"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["Maintenance"])
