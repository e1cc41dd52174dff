from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import stripe
from starlette.concurrency import run_in_threadpool

from ..config import settings

logger = logging.getLogger(__name__)

RETURN_PATH = "payment/success?session_id={CHECKOUT_SESSION_ID}"
CANCEL_PATH = "payment/cancel"


class PaymentError(Exception):
    status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail


class PaymentConfigError(PaymentError):
    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=503)


@dataclass
class PaymentConfirmation:
    paid: bool
    user_id: str | None
    session_id: str


def _require_stripe() -> None:
    secret = settings.stripe_secret_key
    if not secret:
        raise PaymentConfigError("Stripe secret key is missing")
    stripe.api_key = secret


def _build_frontend_url(path: str) -> str:
    base = (settings.frontend_base_url or "").rstrip("/")
    return f"{base}/{path}" if base else f"/{path}"


def _checkout_urls() -> tuple[str, str]:
    success_url = settings.checkout_success_url or _build_frontend_url(RETURN_PATH)
    cancel_url = settings.checkout_cancel_url or _build_frontend_url(CANCEL_PATH)
    return success_url, cancel_url


def _metadata(session: Mapping[str, Any]) -> Mapping[str, Any]:
    metadata = session.get("metadata")
    return metadata if isinstance(metadata, Mapping) else {}


async def create_premium_checkout(email: str, user_id: str) -> str:
    _require_stripe()
    success_url, cancel_url = _checkout_urls()

    def _create_session() -> dict[str, Any]:
        return stripe.checkout.Session.create(
            mode="payment",
            customer_email=email,
            line_items=[
                {
                    "price_data": {
                        "currency": settings.premium_currency,
                        "product_data": {"name": settings.premium_product_name},
                        "unit_amount": settings.premium_price_cents,
                    },
                    "quantity": 1,
                }
            ],
            success_url=success_url,
            cancel_url=cancel_url,
            metadata={"userId": user_id, "email": email},
        )

    try:
        session = await run_in_threadpool(_create_session)
    except stripe.StripeError as exc:
        logger.exception("Stripe checkout session creation failed", extra={"user_id": user_id})
        raise PaymentError("Failed to create Stripe checkout session", status_code=502) from exc

    url = session.get("url")
    if not isinstance(url, str) or not url:
        raise PaymentError("Stripe session missing checkout url", status_code=502)
    logger.info(
        "Premium checkout session created",
        extra={"user_id": user_id, "session_id": session.get("id")},
    )
    return url


async def confirm_session(session_id: str) -> PaymentConfirmation:
    if not session_id or not session_id.startswith("cs_"):
        raise PaymentError("Invalid checkout session id", status_code=400)
    _require_stripe()

    try:
        session = await run_in_threadpool(lambda: stripe.checkout.Session.retrieve(session_id))
    except stripe.InvalidRequestError as exc:
        raise PaymentError("Checkout session not found", status_code=404) from exc
    except stripe.StripeError as exc:
        logger.exception("Stripe session lookup failed", extra={"session_id": session_id})
        raise PaymentError("Failed to verify Stripe checkout session", status_code=502) from exc

    user_id = _metadata(session).get("userId")
    return PaymentConfirmation(
        paid=session.get("payment_status") == "paid",
        user_id=str(user_id) if user_id else None,
        session_id=session_id,
    )


__all__ = [
    "PaymentConfigError",
    "PaymentConfirmation",
    "PaymentError",
    "confirm_session",
    "create_premium_checkout",
]
