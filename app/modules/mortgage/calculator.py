"""
Mortgage and affordability maths for the calculator sheet.

Monthly payment is the standard amortized payment on (price - down payment) plus
monthly property tax and home insurance, both given as yearly percentages of the price.
Affordability uses the 28% rule: housing costs may take 28% of gross monthly income.
"""

from app.modules.mortgage.schemas import (
    MortgageRequest, MortgageResult, AmortizationYear, PaymentBreakdown,
    AffordabilityRequest, AffordabilityResult, DEFAULT_DOWN_PAYMENT_RATIO
)
from app.core.formatters import format_currency_inr
from fastapi import HTTPException
from typing import List

HOUSING_INCOME_RATIO = 0.28
MAX_AMORTIZATION_YEARS = 30
MAX_LOAN_TERM_YEARS = 50


def compound_growth(monthly_rate: float, months: int) -> float:
    try:
        return (1 + monthly_rate) ** months
    except OverflowError:
        raise HTTPException(status_code=400, detail="Interest rate and loan term are out of range")


def amortized_payment(principal: float, monthly_rate: float, months: int) -> float:
    growth = compound_growth(monthly_rate, months)
    return principal * (monthly_rate * growth) / (growth - 1)


def amortization_schedule(principal: float, monthly_rate: float, months: int, payment: float) -> List[AmortizationYear]:
    """Yearly principal/interest split, at most 30 rows"""
    rows = []
    balance = principal
    for year in range(1, min(months // 12, MAX_AMORTIZATION_YEARS) + 1):
        year_interest = balance * monthly_rate * 12
        year_principal = payment * 12 - year_interest
        balance -= year_principal
        rows.append(AmortizationYear(
            year=year,
            principal=round(year_principal, 2),
            interest=round(year_interest, 2),
            balance=round(max(0.0, balance), 2)
        ))
    return rows


def calculate_mortgage(request: MortgageRequest) -> MortgageResult:
    down_payment = request.down_payment
    if down_payment is None:
        down_payment = request.home_price * DEFAULT_DOWN_PAYMENT_RATIO

    principal = request.home_price - down_payment
    monthly_rate = request.interest_rate / 100 / 12
    months = request.loan_term_years * 12

    if principal <= 0 or monthly_rate <= 0 or months <= 0 or request.loan_term_years > MAX_LOAN_TERM_YEARS:
        raise HTTPException(
            status_code=400,
            detail=f"Loan amount, interest rate and loan term must be positive (term at most {MAX_LOAN_TERM_YEARS} years)"
        )

    principal_and_interest = amortized_payment(principal, monthly_rate, months)
    monthly_tax = request.home_price * request.property_tax_rate / 100 / 12
    monthly_insurance = request.home_price * request.insurance_rate / 100 / 12
    monthly_payment = principal_and_interest + monthly_tax + monthly_insurance

    total_cost = monthly_payment * months
    monthly_principal = principal / months

    return MortgageResult(
        loan_amount=round(principal, 2),
        principal_and_interest=round(principal_and_interest, 2),
        monthly_tax=round(monthly_tax, 2),
        monthly_insurance=round(monthly_insurance, 2),
        monthly_payment=round(monthly_payment, 2),
        total_cost=round(total_cost, 2),
        total_interest=round(total_cost - principal, 2),
        breakdown=PaymentBreakdown(
            principal=round(monthly_principal, 2),
            interest=round(principal_and_interest - monthly_principal, 2),
            property_tax=round(monthly_tax, 2),
            insurance=round(monthly_insurance, 2)
        ),
        amortization=amortization_schedule(principal, monthly_rate, months, principal_and_interest),
        formatted_monthly_payment=format_currency_inr(monthly_payment)
    )


def calculate_affordability(request: AffordabilityRequest) -> AffordabilityResult:
    monthly_rate = request.interest_rate / 100 / 12
    months = request.loan_term_years * 12
    if (request.annual_income <= 0 or monthly_rate <= 0 or months <= 0
            or request.loan_term_years > MAX_LOAN_TERM_YEARS):
        raise HTTPException(
            status_code=400,
            detail=f"Income, interest rate and loan term must be positive (term at most {MAX_LOAN_TERM_YEARS} years)"
        )

    down_payment = request.down_payment
    if down_payment is None:
        down_payment = request.home_price * DEFAULT_DOWN_PAYMENT_RATIO
    down_payment_ratio = down_payment / request.home_price if request.home_price > 0 else 0.0
    if down_payment_ratio >= 1:
        raise HTTPException(status_code=400, detail="Down payment must be less than the home price")

    monthly_income = request.annual_income / 12
    max_housing_payment = monthly_income * HOUSING_INCOME_RATIO
    growth = compound_growth(monthly_rate, months)
    max_loan = max_housing_payment * (growth - 1) / (monthly_rate * growth)
    max_price = max_loan / (1 - down_payment_ratio)

    return AffordabilityResult(
        monthly_income=round(monthly_income, 2),
        max_housing_payment=round(max_housing_payment, 2),
        max_loan=round(max_loan, 2),
        max_price=round(max_price, 2),
        formatted_max_price=format_currency_inr(max_price)
    )
