"""
Keyword tables, display labels and response templates.

A Vocabulary bundles everything language-specific that the parser and the
advice engine look up. Both engines take one at construction, so a different
locale is a different Vocabulary, not different code.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from backend.models import DEFAULT_CURRENCY, Category


def contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    """Case-insensitive substring match of any keyword inside text."""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def _frozen(mapping: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class AdviceMessages:
    """
    Response templates for the advice engine.

    Placeholders: {income}, {expense}, {deficit}, {balance}, {rate}, {target},
    {total}, {label}, {currency}. Templates may use any subset.
    """

    greeting: str
    deficit: str
    stable: str
    excellent: str
    food_total: str
    top_category: str
    saving_tip: str
    fallback: str


@dataclass(frozen=True)
class Vocabulary:
    """Immutable lookup tables for one locale."""

    currency: str
    income_keywords: tuple[str, ...]
    freelance_keywords: tuple[str, ...]
    # Order matters: the first category whose keywords match wins
    expense_category_keywords: tuple[tuple[Category, tuple[str, ...]], ...]
    card_keywords: tuple[str, ...]
    wallet_keywords: tuple[str, ...]

    greeting_keywords: tuple[str, ...]
    status_keywords: tuple[str, ...]
    food_query_keywords: tuple[str, ...]
    advice_keywords: tuple[str, ...]

    messages: AdviceMessages
    category_labels: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    type_labels: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    payment_method_labels: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    frequency_labels: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    recurring_note: str = "{title}"

    def category_label(self, category: str) -> str:
        """Display label for a category key, falling back to the key itself."""
        key = category.value if isinstance(category, Category) else category
        return self.category_labels.get(key, key)


ARABIC_MESSAGES = AdviceMessages(
    greeting=(
        "أهلاً بك! أنا نظام التحليل المالي الخاص بك. أنا هنا لمساعدتك في فهم مصاريفك "
        "بدون أي تكلفة إضافية. اسألني عن 'ملخص' أو 'نصيحة'."
    ),
    deficit=(
        "وضعك المالي يحتاج لانتباه ⚠️. مصاريفك ({expense}) أعلى من دخلك ({income}). "
        "العجز الحالي: {deficit}. حاول تقليل النفقات غير الضرورية."
    ),
    stable=(
        "وضعك مستقر، لكن يمكن تحسينه. متبقي معك {balance} {currency}. "
        "نسبة توفيرك {rate}% وهي أقل من النسبة الموصى بها ({target}%)."
    ),
    excellent=(
        "وضعك المالي ممتاز! 👏 متبقي معك {balance} {currency} بنسبة توفير {rate}%. "
        "استمر على هذا المنوال وفكر في استثمار الفائض."
    ),
    food_total="إجمالي صرفك على الطعام هو {total} {currency}.",
    top_category=(
        'أكبر بند مصاريف عندك هو "{label}" بقيمة {total} {currency}. '
        "حاول تراجع مصاريفك في البند ده لو حابب توفر أكتر."
    ),
    saving_tip="نصيحتي الذهبية: حاول دائماً تدخر {target}% من دخلك أول ما تقبض، وعيش بالباقي.",
    fallback=(
        "أنا أعتمد على تحليل الأرقام فقط. يمكنك سؤالي عن 'ملخص الشهر' أو "
        "'نصيحة للتوفير' أو 'مصاريف الاكل'."
    ),
)


DEFAULT_VOCABULARY = Vocabulary(
    currency=DEFAULT_CURRENCY,
    income_keywords=("دخل", "قبض", "مرتب", "مكافأة", "income", "salary", "added", "deposit"),
    freelance_keywords=("فريلانس", "عمل حر", "عميل", "freelance", "project"),
    expense_category_keywords=(
        (Category.FOOD, ("اكل", "طعام", "فطار", "غدا", "عشا", "مطعم", "سوبر", "food", "meal", "kfc", "mac")),
        (Category.TRANSPORT, ("مواصلات", "تاكسي", "اوبر", "بنزين", "عربية", "transport", "uber", "gas", "car")),
        (Category.UTILITIES, ("فاتورة", "كهرباء", "مياه", "نت", "باقة", "شحن", "رصيد", "bill", "wifi", "phone")),
        (Category.HEALTH, ("دكتور", "علاج", "دواء", "صيدلية", "كشف", "health", "doctor", "pharmacy")),
        (Category.ENTERTAINMENT, ("سينما", "خروجة", "فسحة", "لعب", "game", "movie", "fun")),
        (Category.SHOPPING, ("ملابس", "لبس", "جزمة", "شراء", "shopping", "clothes")),
    ),
    card_keywords=("فيزا", "بنك", "كارت", "card", "visa"),
    # "كاش" is here because of "فودافون كاش", a mobile wallet
    wallet_keywords=("فودافون", "كاش", "محفظة", "wallet", "instapay"),
    greeting_keywords=("مرحبا", "اهلا"),
    status_keywords=("وضع", "حالة", "ملخص"),
    food_query_keywords=("اكل", "طعام"),
    advice_keywords=("نصيحة", "توفير"),
    messages=ARABIC_MESSAGES,
    category_labels=_frozen(
        {
            "food": "طعام ومشروبات",
            "transport": "مواصلات",
            "utilities": "فواتير وخدمات",
            "entertainment": "ترفيه",
            "shopping": "تسوق",
            "health": "صحة",
            "salary": "راتب",
            "freelance": "عمل حر",
            "other": "أخرى",
        }
    ),
    type_labels=_frozen({"income": "دخل", "expense": "مصروف"}),
    payment_method_labels=_frozen(
        {
            "cash": "كاش",
            "card": "بطاقة بنكية",
            "wallet": "محفظة إلكترونية",
        }
    ),
    frequency_labels=_frozen(
        {
            "monthly": "شهري",
            "quarterly": "ربع سنوي (كل 3 شهور)",
            "yearly": "سنوي",
        }
    ),
    recurring_note="دفع تلقائي: {title}",
)
