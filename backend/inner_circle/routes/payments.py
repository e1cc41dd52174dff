from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from starlette.concurrency import run_in_threadpool

from .. import metrics, schemas
from ..dependencies import Users
from ..services import payment_service

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post(
    "/checkout-session",
    response_model=schemas.CheckoutSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_checkout_session(
    payload: schemas.CheckoutSessionRequest,
) -> schemas.CheckoutSessionResponse:
    try:
        url = await payment_service.create_premium_checkout(payload.email, payload.userId)
    except payment_service.PaymentConfigError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail)
    except payment_service.PaymentError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail)
    return schemas.CheckoutSessionResponse(url=url)


@router.post("/confirm", response_model=schemas.PaymentConfirmResponse)
async def confirm_payment(
    payload: schemas.PaymentConfirmRequest,
    users: Users,
) -> schemas.PaymentConfirmResponse:
    try:
        confirmation = await payment_service.confirm_session(payload.sessionId)
    except payment_service.PaymentConfigError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail)
    except payment_service.PaymentError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail)

    if not confirmation.paid or not confirmation.user_id:
        return schemas.PaymentConfirmResponse(paid=confirmation.paid, userId=confirmation.user_id)

    await run_in_threadpool(users.set_premium, confirmation.user_id, True)
    metrics.premium_upgrades_total.inc()
    return schemas.PaymentConfirmResponse(paid=True, userId=confirmation.user_id, isPremium=True)
