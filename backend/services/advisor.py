"""Rule-based financial advice engine (local math, no LLM)."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from backend.config import settings
from backend.models import Category, Transaction, TransactionType
from backend.vocabulary import DEFAULT_VOCABULARY, Vocabulary, contains_any

logger = logging.getLogger("masrofy.advisor")


def format_amount(value: float) -> str:
    """Render a money amount, dropping the fraction for whole numbers (700, 45.5)."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


@dataclass
class FinancialSummary:
    """Aggregate totals over a transaction history."""

    total_income: float
    total_expense: float
    balance: float
    savings_rate: float  # percent of income kept; 0 when there is no income


def summarize(history: Iterable[Transaction]) -> FinancialSummary:
    """Compute income, expense, balance and savings rate."""
    total_income = 0.0
    total_expense = 0.0
    for txn in history:
        if txn.type == TransactionType.INCOME:
            total_income += txn.amount
        elif txn.type == TransactionType.EXPENSE:
            total_expense += txn.amount

    balance = total_income - total_expense
    savings_rate = (balance / total_income) * 100 if total_income > 0 else 0.0
    return FinancialSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=balance,
        savings_rate=savings_rate,
    )


def expense_totals_by_category(history: Iterable[Transaction]) -> dict[str, float]:
    """Sum expenses per category key, in first-seen order."""
    totals: dict[str, float] = {}
    for txn in history:
        if txn.type != TransactionType.EXPENSE:
            continue
        key = txn.category.value
        totals[key] = totals.get(key, 0) + txn.amount
    return totals


class FinancialAdviceEngine:
    """
    Answers a free-text question about a transaction history.

    The query is matched against an ordered list of intents; the first one
    whose keywords appear in the query produces the answer. Nothing is cached,
    every call recomputes from the history it is given.
    """

    def __init__(
        self,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        savings_target: float | None = None,
    ):
        self.vocabulary = vocabulary
        self.savings_target = settings.savings_target_percent if savings_target is None else savings_target

    def advise(self, history: list[Transaction], query: str) -> str:
        summary = summarize(history)
        v = self.vocabulary

        intents: list[tuple[str, tuple[str, ...], Callable[[list[Transaction], FinancialSummary], str]]] = [
            ("greeting", v.greeting_keywords, self._greeting),
            ("status", v.status_keywords, self._status),
            ("food", v.food_query_keywords, self._food_total),
            ("advice", v.advice_keywords, self._saving_advice),
        ]

        for name, keywords, respond in intents:
            if contains_any(query, keywords):
                logger.debug("Query %r matched intent %s", query, name)
                return respond(history, summary)

        logger.debug("Query %r matched no intent", query)
        return v.messages.fallback

    def _format(self, template: str, **values) -> str:
        return template.format(
            currency=self.vocabulary.currency,
            target=format_amount(self.savings_target),
            **values,
        )

    def _greeting(self, history: list[Transaction], summary: FinancialSummary) -> str:
        return self._format(self.vocabulary.messages.greeting)

    def _status(self, history: list[Transaction], summary: FinancialSummary) -> str:
        messages = self.vocabulary.messages
        if summary.balance < 0:
            return self._format(
                messages.deficit,
                expense=format_amount(summary.total_expense),
                income=format_amount(summary.total_income),
                deficit=format_amount(abs(summary.balance)),
            )

        template = messages.stable if summary.savings_rate < self.savings_target else messages.excellent
        return self._format(
            template,
            balance=format_amount(summary.balance),
            rate=f"{summary.savings_rate:.1f}",
        )

    def _food_total(self, history: list[Transaction], summary: FinancialSummary) -> str:
        total = sum(
            txn.amount
            for txn in history
            if txn.category == Category.FOOD and txn.type == TransactionType.EXPENSE
        )
        return self._format(self.vocabulary.messages.food_total, total=format_amount(total))

    def _saving_advice(self, history: list[Transaction], summary: FinancialSummary) -> str:
        totals = expense_totals_by_category(history)
        if not totals:
            return self._format(self.vocabulary.messages.saving_tip)

        # max() keeps the first of equal totals, which is the first-seen category
        category, total = max(totals.items(), key=lambda item: item[1])
        return self._format(
            self.vocabulary.messages.top_category,
            label=self.vocabulary.category_label(category),
            total=format_amount(total),
        )


default_engine = FinancialAdviceEngine()


def get_financial_advice(history: list[Transaction], query: str) -> str:
    """Answer a query with the default vocabulary."""
    return default_engine.advise(history, query)
