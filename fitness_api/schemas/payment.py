# fitness_api/schemas/payment.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from fitness_api.models.enums import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    amount: float
    currency: Optional[str] = None
    payment_method: PaymentMethod
    description: Optional[str] = None
    transaction_id: Optional[str] = None
    stripe_payment_id: Optional[str] = None
    details: Optional[Any] = None


class PaymentStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: PaymentStatus
    failure_reason: Optional[str] = None
    receipt_url: Optional[str] = None


class PaymentOut(BaseModel):
    id: int
    user_id: int
    amount: float
    currency: str
    payment_method: str
    status: str
    transaction_id: Optional[str] = None
    stripe_payment_id: Optional[str] = None
    description: Optional[str] = None
    details: Optional[Any] = None
    receipt_url: Optional[str] = None
    invoice_number: Optional[str] = None
    failure_reason: Optional[str] = None
    refunded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
