"""Monthly reports and dashboard aggregates."""

import calendar
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date

from backend.config import settings
from backend.models import (
    FinancialGoal,
    RecurringTransaction,
    Transaction,
    TransactionType,
)
from backend.services.advisor import expense_totals_by_category
from backend.services.goals import total_savings
from backend.services.recurring import monthly_fixed_burden
from backend.services.validation import validate_month
from backend.vocabulary import DEFAULT_VOCABULARY, Vocabulary


@dataclass
class PeriodTotals:
    """Income, expense and net for a set of transactions."""

    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense

    def add(self, txn: Transaction) -> None:
        if txn.type == TransactionType.INCOME:
            self.income += txn.amount
        else:
            self.expense += txn.amount


@dataclass
class CategoryAmount:
    """Spending in one category."""

    category: str
    label: str
    amount: float


@dataclass
class DailyTotals:
    """One day of a monthly trend."""

    day: int
    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass
class MonthlyReport:
    """A month compared to the one before it."""

    year: int
    month: int
    current: PeriodTotals
    previous: PeriodTotals
    income_change_percent: float
    expense_change_percent: float
    top_categories: list[CategoryAmount] = field(default_factory=list)
    daily: list[DailyTotals] = field(default_factory=list)

    @property
    def highest_category(self) -> CategoryAmount | None:
        return self.top_categories[0] if self.top_categories else None


@dataclass
class MonthSummary:
    """Totals for one month of history."""

    year: int
    month: int
    income: float = 0.0
    expense: float = 0.0

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass
class DashboardStats:
    """Everything the dashboard shows."""

    balance: float
    actual_month_income: float
    actual_month_expense: float
    pending_month_income: float
    pending_month_expense: float
    monthly_fixed_burden: int
    total_savings: float
    category_breakdown: list[CategoryAmount] = field(default_factory=list)
    monthly_history: list[MonthSummary] = field(default_factory=list)
    recent_transactions: list[Transaction] = field(default_factory=list)

    @property
    def projected_income(self) -> float:
        return self.actual_month_income + self.pending_month_income

    @property
    def projected_expense(self) -> float:
        return self.actual_month_expense + self.pending_month_expense


def percentage_change(current: float, previous: float) -> float:
    """Change relative to previous; a start from zero counts as +100%."""
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return ((current - previous) / previous) * 100


def _in_month(txn: Transaction, year: int, month: int) -> bool:
    return txn.date.year == year and txn.date.month == month


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def category_breakdown(
    transactions: list[Transaction],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> list[CategoryAmount]:
    """Expense totals per category, largest first."""
    totals = expense_totals_by_category(transactions)
    breakdown = [
        CategoryAmount(category=cat, label=vocabulary.category_label(cat), amount=amount)
        for cat, amount in totals.items()
    ]
    breakdown.sort(key=lambda c: c.amount, reverse=True)
    return breakdown


def generate_monthly_report(
    transactions: list[Transaction],
    year: int,
    month: int,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> MonthlyReport:
    """
    Build the report for one month.

    Args:
        transactions: Full history; only the month and the one before it are used.
        year: Report year.
        month: Report month (1-12).

    Raises:
        ValidationError: If month is outside 1-12
    """
    validate_month(year, month)
    prev_year, prev_month = _previous_month(year, month)

    current_txns = [t for t in transactions if _in_month(t, year, month)]

    current = PeriodTotals()
    previous = PeriodTotals()
    for txn in current_txns:
        current.add(txn)
    for txn in transactions:
        if _in_month(txn, prev_year, prev_month):
            previous.add(txn)

    days_in_month = calendar.monthrange(year, month)[1]
    daily = [DailyTotals(day=day) for day in range(1, days_in_month + 1)]
    for txn in current_txns:
        bucket = daily[txn.date.day - 1]
        if txn.type == TransactionType.INCOME:
            bucket.income += txn.amount
        else:
            bucket.expense += txn.amount

    return MonthlyReport(
        year=year,
        month=month,
        current=current,
        previous=previous,
        income_change_percent=percentage_change(current.income, previous.income),
        expense_change_percent=percentage_change(current.expense, previous.expense),
        top_categories=category_breakdown(current_txns, vocabulary),
        daily=daily,
    )


def monthly_history(transactions: list[Transaction], limit: int) -> list[MonthSummary]:
    """Income and expense per active month, oldest first, last `limit` months."""
    months: dict[tuple[int, int], MonthSummary] = {}
    for txn in transactions:
        key = (txn.date.year, txn.date.month)
        if key not in months:
            months[key] = MonthSummary(year=key[0], month=key[1])
        if txn.type == TransactionType.INCOME:
            months[key].income += txn.amount
        else:
            months[key].expense += txn.amount

    ordered = [months[key] for key in sorted(months)]
    return ordered[-limit:] if limit > 0 else []


def _is_pending(item: RecurringTransaction, today: date) -> bool:
    """Due this month, or overdue from an earlier one."""
    due = item.next_due_date
    due_this_month = due.year == today.year and due.month == today.month
    return due_this_month or due < today


def generate_dashboard(
    transactions: list[Transaction],
    recurring: list[RecurringTransaction],
    goals: list[FinancialGoal],
    today: date | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> DashboardStats:
    """Aggregate the dashboard: balance, this month, pending recurring, savings."""
    today = today or date.today()

    balance = 0.0
    this_month = PeriodTotals()
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            balance += txn.amount
        else:
            balance -= txn.amount
        if _in_month(txn, today.year, today.month):
            this_month.add(txn)

    pending = defaultdict(float)
    for item in recurring:
        if item.active and _is_pending(item, today):
            pending[item.type] += item.amount

    recent = sorted(transactions, key=lambda t: t.date.timestamp(), reverse=True)

    return DashboardStats(
        balance=balance,
        actual_month_income=this_month.income,
        actual_month_expense=this_month.expense,
        pending_month_income=pending[TransactionType.INCOME],
        pending_month_expense=pending[TransactionType.EXPENSE],
        monthly_fixed_burden=monthly_fixed_burden(recurring),
        total_savings=total_savings(goals),
        category_breakdown=category_breakdown(transactions, vocabulary),
        monthly_history=monthly_history(transactions, settings.history_months),
        recent_transactions=recent[: settings.recent_transactions_limit],
    )
