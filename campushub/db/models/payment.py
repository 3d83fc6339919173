from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, func, Enum, Index
import uuid
import enum
from campushub.db.session import Base


class PaymentStatusEnum(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class Payment(Base):
    __tablename__ = "payments"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False)
    payment_status = Column(
        Enum(PaymentStatusEnum, name="payment_status", validate_strings=True),
        default=PaymentStatusEnum.pending,
        nullable=False,
    )
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    transaction_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('idx_payment_user', 'user_id'),
        Index('idx_payment_event', 'event_id'),
    )
