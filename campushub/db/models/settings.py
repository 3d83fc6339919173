from sqlalchemy import Column, String, JSON, DateTime, ForeignKey, func
import uuid
from campushub.db.session import Base


class UserSettings(Base):
    __tablename__ = "settings"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Unique so that concurrent upserts for one user collapse onto a single row
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    preferences = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
