"""
Tax form routes
"""
from typing import List

from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tax_forms_api.db import get_db
from tax_forms_api.db.models import TaxForm
from tax_forms_api.api.schemas.tax_forms import (
    TaxFormDetailsRequest,
    TaxFormResponse,
    TaxFormStatusErrorResponse,
)
from tax_forms_api.services.tax_forms import TaxFormService

router = APIRouter()

CONFLICT_RESPONSES = {409: {"model": TaxFormStatusErrorResponse}}


def get_tax_form_service(db: AsyncSession = Depends(get_db)) -> TaxFormService:
    return TaxFormService(db)


def _found(form: TaxForm | None) -> TaxFormResponse:
    if form is None:
        raise HTTPException(status_code=404, detail="Tax form not found")
    return TaxFormResponse.model_validate(form)


@router.get("", response_model=List[TaxFormResponse])
async def find_all_by_year(
    year: int = Query(..., description="Form year, e.g. 2024"),
    service: TaxFormService = Depends(get_tax_form_service),
):
    """List all forms for a year"""
    forms = await service.find_all_by_year(year)
    return [TaxFormResponse.model_validate(form) for form in forms]


@router.get("/{form_id}", response_model=TaxFormResponse)
async def find_by_id(
    form_id: int,
    service: TaxFormService = Depends(get_tax_form_service),
):
    """Get form by ID"""
    return _found(await service.find_by_id(form_id))


@router.patch("/{form_id}", response_model=TaxFormResponse, responses=CONFLICT_RESPONSES)
async def save(
    form_id: int,
    data: TaxFormDetailsRequest,
    service: TaxFormService = Depends(get_tax_form_service),
):
    """
    Save form details.

    Allowed while the form is NOT_STARTED, IN_PROGRESS or RETURNED;
    the form ends up IN_PROGRESS.
    """
    return _found(await service.save(form_id, data))


@router.patch("/{form_id}/submit", response_model=TaxFormResponse, responses=CONFLICT_RESPONSES)
async def submit(
    form_id: int,
    service: TaxFormService = Depends(get_tax_form_service),
):
    """Submit an IN_PROGRESS form for review"""
    return _found(await service.submit(form_id))


@router.patch("/{form_id}/return", response_model=TaxFormResponse, responses=CONFLICT_RESPONSES)
async def return_form(
    form_id: int,
    service: TaxFormService = Depends(get_tax_form_service),
):
    """Return a SUBMITTED form to the filer"""
    return _found(await service.return_form(form_id))


@router.patch("/{form_id}/accept", response_model=TaxFormResponse, responses=CONFLICT_RESPONSES)
async def accept(
    form_id: int,
    service: TaxFormService = Depends(get_tax_form_service),
):
    """Accept a SUBMITTED form"""
    return _found(await service.accept(form_id))
