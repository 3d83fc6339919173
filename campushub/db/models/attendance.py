from sqlalchemy import Column, String, DateTime, ForeignKey, func, Enum, Index, UniqueConstraint
import uuid
import enum
from campushub.db.session import Base


class AttendanceStatusEnum(str, enum.Enum):
    present = "present"
    absent = "absent"


class Attendance(Base):
    __tablename__ = "attendance"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False)
    status = Column(Enum(AttendanceStatusEnum, name="attendance_status", validate_strings=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', 'event_id', name='uq_attendance_user_event'),
        Index('idx_attendance_event', 'event_id'),
    )
