"""
Role-specific profile tables.

Each profile shares its primary key with the owning user, so a user has at most
one row per table.
"""
from sqlalchemy import Column, String, Text, Integer, Float, Date, DateTime, ForeignKey, func
from campushub.db.session import Base


class StudentProfile(Base):
    __tablename__ = "student_profiles"
    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    roll_number = Column(String(50), nullable=True)
    semester = Column(Integer, nullable=True)
    year_of_study = Column(Integer, nullable=True)
    department = Column(String(100), nullable=True)
    cgpa = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class TeacherProfile(Base):
    __tablename__ = "teacher_profiles"
    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    department = Column(String(100), nullable=True)
    designation = Column(String(100), nullable=True)
    employee_id = Column(String(50), nullable=True)
    specialization = Column(String(255), nullable=True)
    joining_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class CommitteeProfile(Base):
    __tablename__ = "committee_profiles"
    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    committee_name = Column(String(255), nullable=True)
    position = Column(String(100), nullable=True)
    term_start = Column(Date, nullable=True)
    term_end = Column(Date, nullable=True)
    responsibilities = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
