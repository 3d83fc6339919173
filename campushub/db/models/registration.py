from sqlalchemy import Column, String, DateTime, ForeignKey, func, Enum, Index, UniqueConstraint
import uuid
import enum
from campushub.db.session import Base


class RegistrationStatusEnum(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Registration(Base):
    __tablename__ = "registrations"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False)
    status = Column(
        Enum(RegistrationStatusEnum, name="registration_status", validate_strings=True),
        default=RegistrationStatusEnum.pending,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # One registration per (user, event); duplicate inserts fail here
    __table_args__ = (
        UniqueConstraint('user_id', 'event_id', name='uq_registration_user_event'),
        Index('idx_registration_user', 'user_id'),
        Index('idx_registration_event', 'event_id'),
    )
