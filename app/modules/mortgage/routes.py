from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.mortgage.schemas import (
    MortgageRequest, MortgageResult, AffordabilityRequest, AffordabilityResult,
    MortgageLeadCreate, MortgageLeadResponse
)
from app.modules.mortgage.calculator import calculate_mortgage, calculate_affordability
from app.modules.mortgage.service import MortgageLeadService
from app.core.dependencies import get_optional_user
from supabase import Client
from typing import Optional, Dict

router = APIRouter(prefix="/mortgage", tags=["mortgage"])


def get_mortgage_lead_service(supabase: Client = Depends(get_supabase)) -> MortgageLeadService:
    return MortgageLeadService(supabase)


@router.post("/calculate", response_model=MortgageResult)
async def calculate(request: MortgageRequest):
    """Monthly payment, totals and a yearly amortization schedule"""
    return calculate_mortgage(request)


@router.post("/affordability", response_model=AffordabilityResult)
async def affordability(request: AffordabilityRequest):
    return calculate_affordability(request)


@router.post("/leads", response_model=MortgageLeadResponse, status_code=201)
async def create_lead(
    lead: MortgageLeadCreate,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: MortgageLeadService = Depends(get_mortgage_lead_service)
):
    return service.create_mortgage_lead(lead, user_data["id"] if user_data else None)
