"""
Registration lifecycle, attendance marking and payment records.

Registrations start ``pending`` and move once, to ``approved`` or ``rejected``.
Uniqueness of (user_id, event_id) is enforced by the ``uq_registration_user_event``
constraint; the insert's unique violation is reported as a duplicate
registration. Role checks for approve/reject live in the API layer.

Attendance and payments are recorded independently of the registration state.
"""
from typing import Any, List, Optional

from campushub.core import errors
from campushub.core.errors import Result
from campushub.core.logging import for_user
from campushub.db.gateway import EntityStoreGateway, Row
from campushub.db.models import AttendanceStatusEnum, PaymentStatusEnum, RegistrationStatusEnum

PAYMENT_TRANSITIONS = {
    PaymentStatusEnum.pending: {PaymentStatusEnum.completed, PaymentStatusEnum.failed},
}


class RegistrationService:
    def __init__(self, gateway: EntityStoreGateway):
        self.gateway = gateway

    async def register(self, user_id: str, event_id: str) -> Result:
        result = await self.gateway.insert(
            "registrations",
            {"user_id": user_id, "event_id": event_id, "status": RegistrationStatusEnum.pending},
        )
        if not result.success and result.error.code == errors.UNIQUE_VIOLATION:
            return Result.fail(
                errors.DUPLICATE_REGISTRATION,
                f"User {user_id} is already registered for event {event_id}",
            )
        if result.success:
            for_user(user_id).info(f"Registration {result.data['id']} created for event {event_id}")
        return result

    async def approve(self, registration_id: str) -> Result:
        return await self._transition(registration_id, RegistrationStatusEnum.approved)

    async def reject(self, registration_id: str) -> Result:
        return await self._transition(registration_id, RegistrationStatusEnum.rejected)

    async def _transition(self, registration_id: str, target: RegistrationStatusEnum) -> Result:
        current = await self.gateway.fetch_one("registrations", {"id": registration_id})
        if not current.success:
            return current

        status = current.data["status"]
        if status != RegistrationStatusEnum.pending.value:
            return Result.fail(
                errors.INVALID_TRANSITION,
                f"Registration {registration_id} is already {status}",
            )

        # Compare-and-set: matches nothing if another writer moved it first
        updated = await self.gateway.update(
            "registrations",
            {"id": registration_id, "status": RegistrationStatusEnum.pending},
            {"status": target},
        )
        if not updated.success:
            return updated
        if not updated.data:
            return Result.fail(
                errors.INVALID_TRANSITION,
                f"Registration {registration_id} is no longer pending",
            )

        registration = updated.data[0]
        for_user(registration["user_id"]).info(f"Registration {registration_id}: pending -> {target.value}")
        return Result.ok(registration)

    async def registrations_for_user(self, user_id: str) -> List[Row]:
        """Registrations of ``user_id``, each with its event under ``events``."""
        result = await self.gateway.fetch_all("registrations", {"user_id": user_id})
        if not result.success:
            return []

        registrations = []
        for registration in result.data:
            event = await self.gateway.fetch_one("events", {"id": registration["event_id"]})
            registrations.append({**registration, "events": event.data if event.success else None})
        return registrations

    async def registrations_for_event(self, event_id: str) -> List[Row]:
        result = await self.gateway.fetch_all("registrations", {"event_id": event_id})
        return result.data if result.success else []

    async def mark_attendance(self, user_id: str, event_id: str, status: Any) -> Result:
        """Record attendance for the pair, overwriting an earlier mark."""
        try:
            status = AttendanceStatusEnum(status)
        except ValueError:
            return Result.fail(errors.CHECK_VIOLATION, f"Invalid attendance status: {status!r}")

        result = await self.gateway.upsert(
            "attendance",
            {"user_id": user_id, "event_id": event_id, "status": status},
            on_conflict=("user_id", "event_id"),
        )
        if result.success:
            for_user(user_id).info(f"Attendance for event {event_id} marked {status.value}")
        return result

    async def attendance_for_event(self, event_id: str) -> List[Row]:
        result = await self.gateway.fetch_all("attendance", {"event_id": event_id})
        return result.data if result.success else []

    async def record_payment(
        self,
        user_id: str,
        event_id: str,
        amount: float,
        transaction_id: Optional[str] = None,
    ) -> Result:
        if amount < 0:
            return Result.fail(errors.CHECK_VIOLATION, "Payment amount must not be negative")

        result = await self.gateway.insert(
            "payments",
            {
                "user_id": user_id,
                "event_id": event_id,
                "amount": amount,
                "transaction_id": transaction_id,
                "payment_status": PaymentStatusEnum.pending,
            },
        )
        if result.success:
            for_user(user_id).info(f"Payment {result.data['id']} of {amount} recorded for event {event_id}")
        return result

    async def update_payment_status(
        self,
        payment_id: str,
        status: Any,
        transaction_id: Optional[str] = None,
    ) -> Result:
        try:
            target = PaymentStatusEnum(status)
        except ValueError:
            return Result.fail(errors.CHECK_VIOLATION, f"Invalid payment status: {status!r}")

        current = await self.gateway.fetch_one("payments", {"id": payment_id})
        if not current.success:
            return current

        source = PaymentStatusEnum(current.data["payment_status"])
        if target not in PAYMENT_TRANSITIONS.get(source, set()):
            return Result.fail(
                errors.INVALID_TRANSITION,
                f"Payment {payment_id} cannot move from {source.value} to {target.value}",
            )

        values = {"payment_status": target}
        if transaction_id is not None:
            values["transaction_id"] = transaction_id
        updated = await self.gateway.update("payments", {"id": payment_id, "payment_status": source}, values)
        if not updated.success:
            return updated
        if not updated.data:
            return Result.fail(errors.INVALID_TRANSITION, f"Payment {payment_id} is no longer {source.value}")
        return Result.ok(updated.data[0])

    async def payments_for_user(self, user_id: str) -> List[Row]:
        result = await self.gateway.fetch_all("payments", {"user_id": user_id})
        return result.data if result.success else []
