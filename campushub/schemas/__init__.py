from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Any, Dict, Optional
from datetime import date, time, datetime
from campushub.db.models import (
    RoleEnum,
    RegistrationStatusEnum,
    AttendanceStatusEnum,
    PaymentStatusEnum,
)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenResponse(BaseModel):
    """Access token plus the longer-lived refresh token."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class RefreshTokenRequest(BaseModel):
    refresh_token: str

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class UserCreate(BaseModel):
    email: EmailStr
    password: str
    role: RoleEnum
    name: Optional[str] = None

class UserUpdate(BaseModel):
    """Editable base-profile fields; role and identity are not accepted."""
    name: Optional[str] = None
    bio: Optional[str] = None
    branch: Optional[str] = None
    phone: Optional[str] = None
    roll_number: Optional[str] = None
    year: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

class UserOut(BaseModel):
    id: str
    email: EmailStr
    role: RoleEnum
    name: Optional[str] = None
    bio: Optional[str] = None
    branch: Optional[str] = None
    phone: Optional[str] = None
    roll_number: Optional[str] = None
    year: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Profile variants, one per role

class StudentProfileIn(BaseModel):
    roll_number: Optional[str] = None
    semester: Optional[int] = Field(None, ge=1, le=12)
    year_of_study: Optional[int] = Field(None, ge=1, le=6)
    department: Optional[str] = None
    cgpa: Optional[float] = Field(None, ge=0, le=10)

    model_config = ConfigDict(extra="forbid")

class TeacherProfileIn(BaseModel):
    department: Optional[str] = None
    designation: Optional[str] = None
    employee_id: Optional[str] = None
    specialization: Optional[str] = None
    joining_date: Optional[date] = None

    model_config = ConfigDict(extra="forbid")

class CommitteeProfileIn(BaseModel):
    committee_name: Optional[str] = None
    position: Optional[str] = None
    term_start: Optional[date] = None
    term_end: Optional[date] = None
    responsibilities: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

PROFILE_SCHEMAS = {
    RoleEnum.student: StudentProfileIn,
    RoleEnum.teacher: TeacherProfileIn,
    RoleEnum.committee: CommitteeProfileIn,
}


class EventCreate(BaseModel):
    name: str
    description: str = ""
    date: date
    time: time
    location: str

class EventOut(BaseModel):
    id: str
    name: str
    description: str
    date: date
    time: time
    location: str
    organizer_id: str
    created_at: Optional[datetime] = None


class RegistrationCreate(BaseModel):
    event_id: str

class RegistrationOut(BaseModel):
    id: str
    user_id: str
    event_id: str
    status: RegistrationStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class RegistrationWithEvent(RegistrationOut):
    events: Optional[EventOut] = None


class AttendanceMark(BaseModel):
    user_id: str
    event_id: str
    status: AttendanceStatusEnum

class AttendanceOut(BaseModel):
    id: str
    user_id: str
    event_id: str
    status: AttendanceStatusEnum
    created_at: Optional[datetime] = None


class PaymentCreate(BaseModel):
    event_id: str
    amount: float = Field(..., ge=0)
    transaction_id: Optional[str] = None

class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatusEnum
    transaction_id: Optional[str] = None

class PaymentOut(BaseModel):
    id: str
    user_id: str
    event_id: str
    payment_status: PaymentStatusEnum
    amount: float
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None


class NotificationCreate(BaseModel):
    user_id: str
    title: str
    message: str

class NotificationOut(BaseModel):
    id: str
    user_id: str
    title: str
    message: str
    is_read: bool
    created_at: Optional[datetime] = None


class SettingsIn(BaseModel):
    preferences: Dict[str, Any]

class SettingsOut(BaseModel):
    id: str
    user_id: str
    preferences: Dict[str, Any]
    updated_at: Optional[datetime] = None
