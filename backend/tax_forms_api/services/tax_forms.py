"""
Tax form workflow service.

Loads forms, runs them through the status policy and persists the outcome.
Each transition commits the new status and its history entry together, so
readers never see one without the other.
"""
import logging
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tax_forms_api.db.details import TaxFormDetails
from tax_forms_api.db.models import TaxForm, TaxFormHistory, TaxFormStatus
from tax_forms_api.services import status_policy
from tax_forms_api.services.status_policy import TaxFormAction, TaxFormStatusError

logger = logging.getLogger(__name__)


class TaxFormService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # === Queries ===

    async def find_all_by_year(self, year: int) -> List[TaxForm]:
        result = await self.db.execute(
            select(TaxForm)
            .options(selectinload(TaxForm.history))
            .where(TaxForm.form_year == year)
            .order_by(TaxForm.id)
        )
        return list(result.scalars().all())

    async def find_by_id(self, form_id: int) -> Optional[TaxForm]:
        return await self._get(form_id)

    # === Workflow ===

    async def save(self, form_id: int, details: TaxFormDetails) -> Optional[TaxForm]:
        """Replace the form's details. Moves it to IN_PROGRESS; history is untouched."""
        form = await self._get(form_id, for_update=True)
        if form is None:
            logger.debug(f"Save skipped, tax form {form_id} not found")
            return None

        new_status = await self._decide(form, TaxFormAction.SAVE, status_policy.save)
        form.status = new_status
        form.details = details.model_dump()

        await self._commit()
        logger.info(f"Tax form {form_id} saved, status={new_status.value}")
        return await self._get(form_id)

    async def submit(self, form_id: int) -> Optional[TaxForm]:
        return await self._transition(form_id, TaxFormAction.SUBMIT, status_policy.submit)

    async def return_form(self, form_id: int) -> Optional[TaxForm]:
        return await self._transition(form_id, TaxFormAction.RETURN, status_policy.return_form)

    async def accept(self, form_id: int) -> Optional[TaxForm]:
        return await self._transition(form_id, TaxFormAction.ACCEPT, status_policy.accept)

    # === Internals ===

    async def _transition(
        self,
        form_id: int,
        action: TaxFormAction,
        step: Callable[[TaxFormStatus], TaxFormStatus],
    ) -> Optional[TaxForm]:
        form = await self._get(form_id, for_update=True)
        if form is None:
            logger.debug(f"{action.value} skipped, tax form {form_id} not found")
            return None

        previous = form.status
        form.status = await self._decide(form, action, step)
        form.history.append(TaxFormHistory(status=status_policy.HISTORY_EVENTS[action]))

        await self._commit()
        logger.info(
            f"Tax form {form_id} {action.value}: {previous.value} -> {form.status.value}"
        )
        return await self._get(form_id)

    async def _decide(
        self,
        form: TaxForm,
        action: TaxFormAction,
        step: Callable[[TaxFormStatus], TaxFormStatus],
    ) -> TaxFormStatus:
        form_id = form.id
        try:
            return step(form.status)
        except TaxFormStatusError as e:
            # Releases the FOR UPDATE lock taken by _get
            await self.db.rollback()
            logger.warning(f"Rejected {action.value} on tax form {form_id}: {e}")
            raise e.for_form(form_id) from None

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _get(self, form_id: int, for_update: bool = False) -> Optional[TaxForm]:
        query = (
            select(TaxForm)
            .options(selectinload(TaxForm.history))
            .where(TaxForm.id == form_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            # Serializes concurrent transitions on the same row (no-op on SQLite)
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
