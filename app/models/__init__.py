"""Beanie document models and Pydantic schemas."""
from app.models.user import User, UserRole, UserCreate, UserOut
from app.models.district import District, DistrictCreate
from app.models.school import School, SchoolCreate
from app.models.school_class import SchoolClass, SchoolClassCreate, SchoolClassUpdate
from app.models.student import Student, StudentCreate, StudentUpdate
from app.models.attendance import AttendanceRecord, AttendanceMark, AttendanceSubmission, StudentDayStatus
from app.models.alert import Alert
from app.models.intervention import Intervention, InterventionCreate
from app.models.role import Role, PermissionSet, RoleUpdateRequest, RoleResponse

__all__ = [
    "User",
    "UserRole",
    "UserCreate",
    "UserOut",
    "District",
    "DistrictCreate",
    "School",
    "SchoolCreate",
    "SchoolClass",
    "SchoolClassCreate",
    "SchoolClassUpdate",
    "Student",
    "StudentCreate",
    "StudentUpdate",
    "AttendanceRecord",
    "AttendanceMark",
    "AttendanceSubmission",
    "StudentDayStatus",
    "Alert",
    "Intervention",
    "InterventionCreate",
    "Role",
    "PermissionSet",
    "RoleUpdateRequest",
    "RoleResponse",
]
