"""
Database models for tax forms and their audit history
"""
from datetime import datetime
from enum import Enum
from typing import Optional, List

from sqlalchemy import Integer, String, DateTime, ForeignKey, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tax_forms_api.db.database import Base


# === ENUMS ===

class TaxFormStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    RETURNED = "RETURNED"
    ACCEPTED = "ACCEPTED"


class TaxFormHistoryStatus(str, Enum):
    """Workflow events recorded in history (edits are never recorded)"""
    SUBMITTED = "SUBMITTED"
    RETURNED = "RETURNED"
    ACCEPTED = "ACCEPTED"


# === MODELS ===

class TaxForm(Base):
    """One year's assessment form"""
    __tablename__ = "tax_forms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    form_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    form_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # assessed_value, appraised_value, ratio, comments
    details: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    status: Mapped[TaxFormStatus] = mapped_column(
        SQLEnum(TaxFormStatus, name="taxformstatus"),
        default=TaxFormStatus.NOT_STARTED,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    history: Mapped[List["TaxFormHistory"]] = relationship(
        back_populates="tax_form",
        cascade="all, delete-orphan",
        order_by=lambda: [TaxFormHistory.created_at, TaxFormHistory.id],
    )


class TaxFormHistory(Base):
    """Append-only audit record of a submit/return/accept"""
    __tablename__ = "tax_form_histories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tax_form_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tax_forms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[TaxFormHistoryStatus] = mapped_column(
        SQLEnum(TaxFormHistoryStatus, name="taxformhistorystatus"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    tax_form: Mapped["TaxForm"] = relationship(back_populates="history")
