from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class CheckoutSessionRequest(BaseModel):
    email: str
    userId: str


class CheckoutSessionResponse(BaseModel):
    url: str


class PaymentConfirmRequest(BaseModel):
    sessionId: str = Field(validation_alias=AliasChoices("sessionId", "session_id"))


class PaymentConfirmResponse(BaseModel):
    paid: bool
    userId: Optional[str] = None
    isPremium: bool = False
