from enum import Enum


class Role(str, Enum):
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"


class ClockAction(str, Enum):
    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"


class AuditStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class AuditAction(str, Enum):
    CLOCK_IN_SUCCESS = "CLOCK_IN_SUCCESS"
    CLOCK_OUT_SUCCESS = "CLOCK_OUT_SUCCESS"
    PIN_LOGIN_FAILURE = "PIN_LOGIN_FAILURE"
    CLOCK_ACTION_FAILURE = "CLOCK_ACTION_FAILURE"
    ADMIN_LOGIN_SUCCESS = "ADMIN_LOGIN_SUCCESS"
    ADMIN_LOGIN_FAILURE = "ADMIN_LOGIN_FAILURE"
    USER_CREATE_SUCCESS = "USER_CREATE_SUCCESS"
    USER_DELETE_SUCCESS = "USER_DELETE_SUCCESS"
    USER_CREDENTIALS_RESET_SUCCESS = "USER_CREDENTIALS_RESET_SUCCESS"
    WEEKLY_RESET_SUCCESS = "WEEKLY_RESET_SUCCESS"
    TIMESHEET_EXPORT = "TIMESHEET_EXPORT"
    AUDIT_LOG_EXPORT = "AUDIT_LOG_EXPORT"
