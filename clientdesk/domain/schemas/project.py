"""Pydantic schemas for Project domain."""

from pydantic import BaseModel, field_validator
from datetime import date
from decimal import Decimal
from typing import Optional

from clientdesk.core.money import to_decimal


class Payment(BaseModel):
    amount: Decimal = Decimal("0")
    paid: bool = False

    @field_validator("amount", mode="before")
    @classmethod
    def _numeric_or_zero(cls, value):
        return to_decimal(value)


class ProjectRead(BaseModel):
    id: str
    client_id: str
    name: str
    status: Optional[str] = "planning"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    contract_value: Optional[Decimal] = None
    payments: list[Payment] = []

    model_config = {"from_attributes": True}

    @field_validator("contract_value", mode="before")
    @classmethod
    def _numeric_or_none(cls, value):
        if value is None or value == "":
            return None
        return to_decimal(value)

    @field_validator("payments", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return value or []


class ProjectStats(BaseModel):
    count: int
    total_contract_value: Decimal


class InstallmentView(BaseModel):
    number: int
    amount: Decimal
    paid: bool
    amount_display: str


class PaymentProgress(BaseModel):
    installments: list[InstallmentView]
    installment_count: int
    paid_count: int
    total_paid: Decimal
    debt: Decimal
    is_credit: bool


class StatusDisplay(BaseModel):
    code: Optional[str] = None
    label: str
    tag: str
