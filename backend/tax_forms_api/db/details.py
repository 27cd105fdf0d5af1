"""
Shape of the JSON stored in tax_forms.details
"""
from typing import Optional

from pydantic import BaseModel, Field

from tax_forms_api.core.config import settings


class StoredTaxFormDetails(BaseModel):
    """Details as persisted; no limits, rows written under older settings must still load"""
    assessed_value: int
    appraised_value: Optional[int] = None
    ratio: float
    comments: Optional[str] = None


class TaxFormDetails(StoredTaxFormDetails):
    """Details accepted on save, checked against the configured limits"""
    assessed_value: int = Field(ge=0, le=settings.MAX_ASSESSED_VALUE)
    appraised_value: Optional[int] = Field(default=None, ge=0, le=settings.MAX_APPRAISED_VALUE)
    ratio: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)
    comments: Optional[str] = Field(default=None, max_length=settings.MAX_COMMENTS_LENGTH)
