from sqlalchemy import Column, String, Text, DateTime, func, Enum
import uuid
import enum
from campushub.db.session import Base


class RoleEnum(str, enum.Enum):
    student = "student"
    teacher = "teacher"
    committee = "committee"


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    # Role is fixed at sign-up; nothing in the service layer updates it.
    role = Column(Enum(RoleEnum, name="user_role", validate_strings=True), nullable=False)
    name = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    branch = Column(String(100), nullable=True)
    phone = Column(String(32), nullable=True)
    roll_number = Column(String(50), nullable=True)
    year = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
