"""
Pydantic schemas for tax forms
"""
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from tax_forms_api.db.details import StoredTaxFormDetails, TaxFormDetails
from tax_forms_api.db.models import TaxFormStatus, TaxFormHistoryStatus


# === Requests ===

class TaxFormDetailsRequest(TaxFormDetails):
    """Body of PATCH /forms/{id}"""


# === Responses ===

class TaxFormHistoryResponse(BaseModel):
    tax_form_id: int
    status: TaxFormHistoryStatus
    created_at: datetime

    class Config:
        from_attributes = True


class TaxFormResponse(BaseModel):
    id: int
    form_year: int
    form_name: str
    status: TaxFormStatus
    details: Optional[StoredTaxFormDetails] = None
    history: List[TaxFormHistoryResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TaxFormStatusErrorResponse(BaseModel):
    detail: str
    current_status: TaxFormStatus
    target_status: TaxFormStatus
