"""
Status transition rules for tax forms.

Every workflow action maps the current status to a new one or raises
TaxFormStatusError. Nothing here touches the database: the service layer
loads the form, asks this module for the next status, and persists the
result.

    save        NOT_STARTED | IN_PROGRESS | RETURNED  -> IN_PROGRESS
    submit      IN_PROGRESS                           -> SUBMITTED
    return_form SUBMITTED                             -> RETURNED
    accept      SUBMITTED                             -> ACCEPTED

A returned form has to be saved again before it can be resubmitted.
"""
from enum import Enum
from typing import Optional

from tax_forms_api.db.models import TaxFormStatus, TaxFormHistoryStatus


class TaxFormAction(str, Enum):
    SAVE = "save"
    SUBMIT = "submit"
    RETURN = "return"
    ACCEPT = "accept"


class TaxFormStatusError(Exception):
    """Raised when an action is not allowed from the form's current status"""

    def __init__(
        self,
        current_status: TaxFormStatus,
        target_status: TaxFormStatus,
        form_id: Optional[int] = None,
    ):
        self.current_status = current_status
        self.target_status = target_status
        self.form_id = form_id
        super().__init__(self.message)

    @property
    def message(self) -> str:
        subject = f"Tax form {self.form_id}" if self.form_id is not None else "Tax form"
        return (
            f"{subject} is in {self.current_status.value} status, "
            f"cannot move to {self.target_status.value} status"
        )

    def for_form(self, form_id: int) -> "TaxFormStatusError":
        return TaxFormStatusError(self.current_status, self.target_status, form_id)


# action -> (allowed current statuses, resulting status)
TRANSITIONS: dict[TaxFormAction, tuple[frozenset[TaxFormStatus], TaxFormStatus]] = {
    TaxFormAction.SAVE: (
        frozenset({TaxFormStatus.NOT_STARTED, TaxFormStatus.IN_PROGRESS, TaxFormStatus.RETURNED}),
        TaxFormStatus.IN_PROGRESS,
    ),
    TaxFormAction.SUBMIT: (
        frozenset({TaxFormStatus.IN_PROGRESS}),
        TaxFormStatus.SUBMITTED,
    ),
    TaxFormAction.RETURN: (
        frozenset({TaxFormStatus.SUBMITTED}),
        TaxFormStatus.RETURNED,
    ),
    TaxFormAction.ACCEPT: (
        frozenset({TaxFormStatus.SUBMITTED}),
        TaxFormStatus.ACCEPTED,
    ),
}

# Edits are not audited, so SAVE has no entry
HISTORY_EVENTS: dict[TaxFormAction, TaxFormHistoryStatus] = {
    TaxFormAction.SUBMIT: TaxFormHistoryStatus.SUBMITTED,
    TaxFormAction.RETURN: TaxFormHistoryStatus.RETURNED,
    TaxFormAction.ACCEPT: TaxFormHistoryStatus.ACCEPTED,
}


def can_apply(action: TaxFormAction, current: TaxFormStatus) -> bool:
    allowed, _ = TRANSITIONS[action]
    return current in allowed


def apply(action: TaxFormAction, current: TaxFormStatus) -> TaxFormStatus:
    """Return the status `action` leads to from `current`, or raise TaxFormStatusError."""
    allowed, target = TRANSITIONS[action]
    if current not in allowed:
        raise TaxFormStatusError(current, target)
    return target


def save(current: TaxFormStatus) -> TaxFormStatus:
    return apply(TaxFormAction.SAVE, current)


def submit(current: TaxFormStatus) -> TaxFormStatus:
    return apply(TaxFormAction.SUBMIT, current)


def return_form(current: TaxFormStatus) -> TaxFormStatus:
    return apply(TaxFormAction.RETURN, current)


def accept(current: TaxFormStatus) -> TaxFormStatus:
    return apply(TaxFormAction.ACCEPT, current)
