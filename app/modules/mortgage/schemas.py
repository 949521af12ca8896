from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime

DEFAULT_INTEREST_RATE = 6.5
DEFAULT_LOAN_TERM_YEARS = 30
DEFAULT_PROPERTY_TAX_RATE = 1.2
DEFAULT_INSURANCE_RATE = 0.5
DEFAULT_DOWN_PAYMENT_RATIO = 0.2


class MortgageRequest(BaseModel):
    home_price: float
    down_payment: Optional[float] = None  # defaults to 20% of the price
    interest_rate: float = DEFAULT_INTEREST_RATE
    loan_term_years: int = DEFAULT_LOAN_TERM_YEARS
    property_tax_rate: float = DEFAULT_PROPERTY_TAX_RATE
    insurance_rate: float = DEFAULT_INSURANCE_RATE


class AmortizationYear(BaseModel):
    year: int
    principal: float
    interest: float
    balance: float


class PaymentBreakdown(BaseModel):
    principal: float
    interest: float
    property_tax: float
    insurance: float


class MortgageResult(BaseModel):
    loan_amount: float
    principal_and_interest: float
    monthly_tax: float
    monthly_insurance: float
    monthly_payment: float
    total_cost: float
    total_interest: float
    breakdown: PaymentBreakdown
    amortization: List[AmortizationYear]
    formatted_monthly_payment: str


class AffordabilityRequest(BaseModel):
    annual_income: float
    monthly_debts: float = 0
    home_price: float
    down_payment: Optional[float] = None
    interest_rate: float = DEFAULT_INTEREST_RATE
    loan_term_years: int = DEFAULT_LOAN_TERM_YEARS


class AffordabilityResult(BaseModel):
    monthly_income: float
    max_housing_payment: float
    max_loan: float
    max_price: float
    formatted_max_price: str


class MortgageLeadCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    property_id: Optional[int] = None
    property_price: Optional[float] = None
    down_payment: Optional[float] = None
    interest_rate: Optional[float] = None
    loan_term: Optional[int] = None


class MortgageLeadResponse(MortgageLeadCreate):
    id: str
    user_id: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
