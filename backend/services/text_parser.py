"""Local free-text transaction parser (keyword matching, no LLM)."""

import logging
import math
import re

from backend.models import Category, PaymentMethod, TransactionDraft, TransactionType
from backend.vocabulary import DEFAULT_VOCABULARY, Vocabulary, contains_any

logger = logging.getLogger("masrofy.parser")

# First unsigned decimal: 50, 50.5, 1200.75. ASCII digits only.
AMOUNT_PATTERN = re.compile(r"\d+(?:\.\d+)?", re.ASCII)


def extract_amount(text: str) -> float | None:
    """Return the first decimal number in text, or None if there is none."""
    match = AMOUNT_PATTERN.search(text)
    if not match:
        return None
    return float(match.group(0))


class TransactionTextParser:
    """
    Converts a free-text utterance into a TransactionDraft.

    Every classification step is a plain keyword cascade over the injected
    Vocabulary. Keywords match as case-insensitive substrings, so a keyword
    inside a longer word still counts.
    """

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary

    def parse(self, text: str) -> TransactionDraft | None:
        """
        Parse text into a draft.

        Returns None when the text holds no usable amount: no number at all,
        zero, or a number too large to represent. That is the only failure;
        everything else falls back to defaults.
        """
        amount = extract_amount(text)
        if amount is None:
            logger.debug("No amount found in %r", text)
            return None
        if amount <= 0 or not math.isfinite(amount):
            logger.debug("Unusable amount in %r", text)
            return None

        txn_type = self.classify_type(text)
        return TransactionDraft(
            amount=amount,
            currency=self.vocabulary.currency,
            type=txn_type,
            category=self.classify_category(text, txn_type),
            note=text,
            payment_method=self.classify_payment_method(text),
        )

    def classify_type(self, text: str) -> TransactionType:
        if contains_any(text, self.vocabulary.income_keywords):
            return TransactionType.INCOME
        return TransactionType.EXPENSE

    def classify_category(self, text: str, txn_type: TransactionType) -> Category:
        """Income is salary or freelance; expenses take the first matching category."""
        if txn_type == TransactionType.INCOME:
            if contains_any(text, self.vocabulary.freelance_keywords):
                return Category.FREELANCE
            return Category.SALARY

        for category, keywords in self.vocabulary.expense_category_keywords:
            if contains_any(text, keywords):
                return category
        return Category.OTHER

    def classify_payment_method(self, text: str) -> PaymentMethod:
        """Every rule is checked; the last one that matches wins (wallet beats card)."""
        method = PaymentMethod.CASH
        rules = (
            (self.vocabulary.card_keywords, PaymentMethod.CARD),
            (self.vocabulary.wallet_keywords, PaymentMethod.WALLET),
        )
        for keywords, candidate in rules:
            if contains_any(text, keywords):
                method = candidate
        return method


default_parser = TransactionTextParser()


def parse_transaction_text(text: str) -> TransactionDraft | None:
    """Parse text with the default vocabulary."""
    return default_parser.parse(text)
