"""Turning drafts into transactions and applying explicit edits."""

from datetime import datetime

from backend.models import Transaction, TransactionDraft, TransactionUpdate


def build_transaction(draft: TransactionDraft, when: datetime | None = None) -> Transaction:
    """Give a draft an identity and a date. The draft itself is left untouched."""
    return Transaction(**draft.model_dump(), date=when or datetime.now())


def apply_update(transaction: Transaction, update: TransactionUpdate) -> Transaction:
    """
    Return a copy of transaction with the edit applied.

    Only note, category and amount are editable; fields left as None in the
    update keep their current value.
    """
    changes = update.model_dump(exclude_none=True)
    if not changes:
        return transaction
    return transaction.model_copy(update=changes)
