"""Database models package."""
from campushub.db.models.user import User, RoleEnum
from campushub.db.models.profile import StudentProfile, TeacherProfile, CommitteeProfile
from campushub.db.models.event import Event
from campushub.db.models.registration import Registration, RegistrationStatusEnum
from campushub.db.models.attendance import Attendance, AttendanceStatusEnum
from campushub.db.models.payment import Payment, PaymentStatusEnum
from campushub.db.models.notification import Notification
from campushub.db.models.settings import UserSettings

__all__ = [
    "User", "RoleEnum",
    "StudentProfile", "TeacherProfile", "CommitteeProfile",
    "Event",
    "Registration", "RegistrationStatusEnum",
    "Attendance", "AttendanceStatusEnum",
    "Payment", "PaymentStatusEnum",
    "Notification",
    "UserSettings",
]
