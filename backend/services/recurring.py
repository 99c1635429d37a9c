"""Recurring income/expense scheduling."""

import calendar
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime

from backend.models import (
    Frequency,
    PaymentMethod,
    RecurringTransaction,
    Transaction,
    TransactionType,
)
from backend.services.validation import ValidationError
from backend.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger("masrofy.recurring")

MONTHS_PER_PERIOD: dict[Frequency, int] = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.YEARLY: 12,
}

# Used only to split "N days left" into months and days for display
DAYS_PER_MONTH = 30


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def advance_due_date(due: date, frequency: Frequency) -> date:
    """
    Next due date after one period.

    Raises:
        ValidationError: If the next due date falls past the last supported year
    """
    try:
        return add_months(due, MONTHS_PER_PERIOD[frequency])
    except ValueError as e:
        raise ValidationError(f"Cannot advance due date {due.isoformat()}: {e}") from e


def is_due(item: RecurringTransaction, today: date) -> bool:
    """An item is due on or after its due date."""
    return item.next_due_date <= today


def remaining_time(due: date, today: date) -> tuple[int, int] | None:
    """
    Split the time until due into (months, days) using 30-day months.

    Returns None when the item is already due.
    """
    total_days = (due - today).days
    if total_days <= 0:
        return None
    return divmod(total_days, DAYS_PER_MONTH)


@dataclass
class RecurringStatus:
    """Due state of one recurring item."""

    item: RecurringTransaction
    due: bool
    days_remaining: int
    months_left: int | None = None
    days_left: int | None = None


def recurring_status(item: RecurringTransaction, today: date) -> RecurringStatus:
    remaining = remaining_time(item.next_due_date, today)
    status = RecurringStatus(
        item=item,
        due=is_due(item, today),
        days_remaining=(item.next_due_date - today).days,
    )
    if remaining:
        status.months_left, status.days_left = remaining
    return status


def process_recurring(
    item: RecurringTransaction,
    now: datetime | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> tuple[Transaction, RecurringTransaction]:
    """
    Record one occurrence of a recurring item.

    Returns the new transaction (dated now, paid in cash) and a copy of the
    item whose due date moved forward by one period from its previous due
    date.

    Raises:
        ValidationError: If the item is inactive or its next due date is out of range
    """
    if not item.active:
        raise ValidationError(f"Recurring item '{item.title}' is inactive")

    now = now or datetime.now()
    transaction = Transaction(
        amount=item.amount,
        currency=vocabulary.currency,
        type=item.type,
        category=item.category,
        date=now,
        note=vocabulary.recurring_note.format(title=item.title),
        payment_method=PaymentMethod.CASH,
    )
    next_due = advance_due_date(item.next_due_date, item.frequency)
    updated = item.model_copy(update={"next_due_date": next_due})

    logger.info(
        "Processed recurring '%s' (%s %.2f), next due %s",
        item.title,
        item.type.value,
        item.amount,
        next_due.isoformat(),
    )
    return transaction, updated


def monthly_fixed_burden(items: list[RecurringTransaction]) -> int:
    """Average monthly cost of active recurring expenses, rounded up."""
    total = 0.0
    for item in items:
        if not item.active or item.type != TransactionType.EXPENSE:
            continue
        total += item.amount / MONTHS_PER_PERIOD[item.frequency]
    return math.ceil(total)
