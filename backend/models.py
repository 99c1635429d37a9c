"""Data models for Masrofy."""

from datetime import date, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

DEFAULT_CURRENCY = "ج.م"


def _new_id() -> str:
    return uuid4().hex


class TransactionType(str, Enum):
    """Direction of money flow."""

    INCOME = "income"
    EXPENSE = "expense"


class Category(str, Enum):
    """Closed set of transaction categories."""

    FOOD = "food"
    TRANSPORT = "transport"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    HEALTH = "health"
    SALARY = "salary"
    FREELANCE = "freelance"
    OTHER = "other"


class PaymentMethod(str, Enum):
    """How a transaction was paid."""

    CASH = "cash"
    CARD = "card"
    WALLET = "wallet"


class Frequency(str, Enum):
    """Repeat interval of a recurring item."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class TransactionDraft(BaseModel):
    """An unsaved transaction produced by parsing or manual entry."""

    amount: float = Field(gt=0, allow_inf_nan=False)
    currency: str = DEFAULT_CURRENCY
    type: TransactionType = TransactionType.EXPENSE
    category: Category = Category.OTHER
    note: str = ""
    payment_method: PaymentMethod = PaymentMethod.CASH


class Transaction(TransactionDraft):
    """A recorded income or expense event."""

    id: str = Field(default_factory=_new_id)
    date: datetime


class TransactionUpdate(BaseModel):
    """Explicit edit of an existing transaction. Unset fields stay as they are."""

    note: str | None = None
    category: Category | None = None
    amount: float | None = Field(default=None, gt=0, allow_inf_nan=False)


class RecurringTransaction(BaseModel):
    """Template for a periodically repeating income or expense."""

    id: str = Field(default_factory=_new_id)
    title: str
    amount: float = Field(gt=0, allow_inf_nan=False)
    type: TransactionType = TransactionType.EXPENSE
    category: Category = Category.OTHER
    frequency: Frequency = Frequency.MONTHLY
    next_due_date: date
    active: bool = True


class FinancialGoal(BaseModel):
    """A savings target."""

    id: str = Field(default_factory=_new_id)
    name: str
    target_amount: float = Field(gt=0, allow_inf_nan=False)
    current_amount: float = Field(default=0, ge=0, allow_inf_nan=False)
    deadline: date


# ==================== API REQUESTS ====================


class ParseRequest(BaseModel):
    """Free-text transaction entry."""

    text: str


class CreateTransactionRequest(BaseModel):
    """Assign identity and date to a draft."""

    draft: TransactionDraft
    date: datetime | None = None


class EditTransactionRequest(BaseModel):
    """Apply an explicit edit to a transaction."""

    transaction: Transaction
    update: TransactionUpdate


class AdviceRequest(BaseModel):
    """Question about the user's finances."""

    history: list[Transaction] = Field(default_factory=list)
    query: str


class AdviceResponse(BaseModel):
    """Answer from the advice engine."""

    answer: str


class SummaryRequest(BaseModel):
    """Totals over a transaction history."""

    transactions: list[Transaction] = Field(default_factory=list)


class MonthlyReportRequest(BaseModel):
    """Report for one calendar month."""

    transactions: list[Transaction] = Field(default_factory=list)
    year: int
    month: int


class DashboardRequest(BaseModel):
    """Everything the dashboard aggregates."""

    transactions: list[Transaction] = Field(default_factory=list)
    recurring: list[RecurringTransaction] = Field(default_factory=list)
    goals: list[FinancialGoal] = Field(default_factory=list)
    today: date | None = None


class RecurringStatusRequest(BaseModel):
    """Due status of recurring items."""

    items: list[RecurringTransaction] = Field(default_factory=list)
    today: date | None = None


class ProcessRecurringRequest(BaseModel):
    """Record one occurrence of a recurring item."""

    item: RecurringTransaction
    now: datetime | None = None


class ProcessRecurringResponse(BaseModel):
    """The recorded transaction and the rescheduled item."""

    transaction: Transaction
    item: RecurringTransaction


class GoalStatusRequest(BaseModel):
    """Progress of savings goals."""

    goals: list[FinancialGoal] = Field(default_factory=list)
    today: date | None = None


class AddFundsRequest(BaseModel):
    """Add money to a savings goal."""

    goal: FinancialGoal
    amount: float = Field(allow_inf_nan=False)
