from __future__ import annotations
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PaymentIntentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_id: str = Field(..., alias="courseId", min_length=1)
    user_id: str = Field(..., alias="userId", min_length=1)
    course_title: Optional[str] = Field(None, alias="courseTitle")


class PaymentIntentOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(..., alias="clientSecret")
    payment_intent_id: str = Field(..., alias="paymentIntentId")
    amount: int
    final_amount: Decimal = Field(..., alias="finalAmount")
    currency: str
