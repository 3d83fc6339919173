from fastapi import APIRouter, Depends
from typing import List
from campushub.schemas import PaymentCreate, PaymentOut, PaymentStatusUpdate
from campushub.services.registration_service import RegistrationService
from campushub.auth import get_current_user, get_gateway, role_required
from campushub.db.gateway import EntityStoreGateway
from campushub.db.models import RoleEnum
from campushub.api.responses import unwrap

router = APIRouter(prefix="/payments", tags=["payments"])


def get_registration_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> RegistrationService:
    return RegistrationService(gateway)


@router.post("", response_model=PaymentOut)
async def create_payment(
    payload: PaymentCreate,
    user=Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    result = await registration_service.record_payment(
        user["id"], payload.event_id, payload.amount, payload.transaction_id
    )
    return unwrap(result)


@router.get("/me", response_model=List[PaymentOut])
async def my_payments(
    user=Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    return await registration_service.payments_for_user(user["id"])


@router.patch("/{payment_id}", response_model=PaymentOut)
async def update_payment(
    payment_id: str,
    payload: PaymentStatusUpdate,
    user=Depends(role_required(RoleEnum.committee)),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    result = await registration_service.update_payment_status(
        payment_id, payload.payment_status, payload.transaction_id
    )
    return unwrap(result, not_found="Payment not found")
