"""FastAPI application for Masrofy."""

import dataclasses
import logging
from datetime import date

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.config import settings
from backend.models import (
    AddFundsRequest,
    AdviceRequest,
    AdviceResponse,
    CreateTransactionRequest,
    DashboardRequest,
    EditTransactionRequest,
    FinancialGoal,
    GoalStatusRequest,
    MonthlyReportRequest,
    ParseRequest,
    ProcessRecurringRequest,
    ProcessRecurringResponse,
    RecurringStatusRequest,
    SummaryRequest,
    Transaction,
    TransactionDraft,
)
from backend.services.advisor import FinancialAdviceEngine, summarize
from backend.services.goals import add_funds, goal_status
from backend.services.ledger import apply_update, build_transaction
from backend.services.recurring import process_recurring, recurring_status
from backend.services.reports import CategoryAmount, generate_dashboard, generate_monthly_report
from backend.services.text_parser import TransactionTextParser
from backend.services.validation import ValidationError
from backend.vocabulary import DEFAULT_VOCABULARY

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger("masrofy.api")

vocabulary = dataclasses.replace(DEFAULT_VOCABULARY, currency=settings.currency)
text_parser = TransactionTextParser(vocabulary)
advice_engine = FinancialAdviceEngine(vocabulary)

app = FastAPI(
    title="Masrofy",
    description="Personal finance tracker with local text parsing and rule-based advice",
    version="0.1.0",
)

# CORS for the web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup():
    """Log configuration on startup."""
    settings.log_config()


def _categories_to_list(categories: list[CategoryAmount]) -> list[dict]:
    return [{"category": c.category, "label": c.label, "amount": round(c.amount, 2)} for c in categories]


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/vocabulary")
async def get_vocabulary():
    """Display labels for categories, types, payment methods and frequencies."""
    return {
        "currency": vocabulary.currency,
        "categories": dict(vocabulary.category_labels),
        "types": dict(vocabulary.type_labels),
        "payment_methods": dict(vocabulary.payment_method_labels),
        "frequencies": dict(vocabulary.frequency_labels),
    }


# ==================== TRANSACTION ENDPOINTS ====================


@app.post("/parse", response_model=TransactionDraft)
async def parse_text(request: ParseRequest):
    """Parse a free-text utterance into a transaction draft."""
    draft = text_parser.parse(request.text)
    if draft is None:
        raise HTTPException(status_code=422, detail="Could not find an amount in the text")
    return draft


@app.post("/transactions", response_model=Transaction)
async def create_transaction(request: CreateTransactionRequest):
    """Assign an id and a date to a draft."""
    return build_transaction(request.draft, request.date)


@app.post("/transactions/edit", response_model=Transaction)
async def edit_transaction(request: EditTransactionRequest):
    """Apply an edit to note, category or amount."""
    return apply_update(request.transaction, request.update)


# ==================== ADVICE ENDPOINTS ====================


@app.post("/advice", response_model=AdviceResponse)
async def get_advice(request: AdviceRequest):
    """Answer a question about the given transaction history."""
    try:
        answer = advice_engine.advise(request.history, request.query)
    except Exception as e:
        logger.exception("Advice failed")
        raise HTTPException(status_code=500, detail=f"Advice error: {str(e)}")
    return AdviceResponse(answer=answer)


@app.post("/summary")
async def get_summary(request: SummaryRequest):
    """Income, expense, balance and savings rate."""
    summary = summarize(request.transactions)
    return {
        "total_income": round(summary.total_income, 2),
        "total_expense": round(summary.total_expense, 2),
        "balance": round(summary.balance, 2),
        "savings_rate": round(summary.savings_rate, 1),
    }


# ==================== REPORT ENDPOINTS ====================


@app.post("/reports/monthly")
async def get_monthly_report(request: MonthlyReportRequest):
    """
    Get a monthly report compared to the previous month.

    Includes totals, category breakdown and a daily trend for every day of
    the month.
    """
    try:
        report = generate_monthly_report(request.transactions, request.year, request.month, vocabulary)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    highest = report.highest_category
    return {
        "year": report.year,
        "month": report.month,
        "current": {
            "income": round(report.current.income, 2),
            "expense": round(report.current.expense, 2),
            "net": round(report.current.net, 2),
        },
        "previous": {
            "income": round(report.previous.income, 2),
            "expense": round(report.previous.expense, 2),
            "net": round(report.previous.net, 2),
        },
        "income_change_percent": round(report.income_change_percent, 1),
        "expense_change_percent": round(report.expense_change_percent, 1),
        "top_categories": _categories_to_list(report.top_categories),
        "highest_category": _categories_to_list([highest])[0] if highest else None,
        "daily": [
            {
                "day": d.day,
                "income": round(d.income, 2),
                "expense": round(d.expense, 2),
                "net": round(d.net, 2),
            }
            for d in report.daily
        ],
    }


@app.post("/dashboard")
async def get_dashboard(request: DashboardRequest):
    """Get overall dashboard statistics."""
    stats = generate_dashboard(
        request.transactions,
        request.recurring,
        request.goals,
        today=request.today,
        vocabulary=vocabulary,
    )
    return {
        "balance": round(stats.balance, 2),
        "actual_month_income": round(stats.actual_month_income, 2),
        "actual_month_expense": round(stats.actual_month_expense, 2),
        "pending_month_income": round(stats.pending_month_income, 2),
        "pending_month_expense": round(stats.pending_month_expense, 2),
        "projected_income": round(stats.projected_income, 2),
        "projected_expense": round(stats.projected_expense, 2),
        "monthly_fixed_burden": stats.monthly_fixed_burden,
        "total_savings": round(stats.total_savings, 2),
        "category_breakdown": _categories_to_list(stats.category_breakdown),
        "monthly_history": [
            {"month": m.key, "income": round(m.income, 2), "expense": round(m.expense, 2)}
            for m in stats.monthly_history
        ],
        "recent_transactions": [t.model_dump(mode="json") for t in stats.recent_transactions],
    }


# ==================== RECURRING ENDPOINTS ====================


@app.post("/recurring/status")
async def get_recurring_status(request: RecurringStatusRequest):
    """Due flag and remaining time for each recurring item."""
    today = request.today or date.today()
    result = []
    for item in request.items:
        status = recurring_status(item, today)
        result.append(
            {
                "id": item.id,
                "title": item.title,
                "frequency_label": vocabulary.frequency_labels.get(item.frequency.value, item.frequency.value),
                "due": status.due,
                "days_remaining": status.days_remaining,
                "months_left": status.months_left,
                "days_left": status.days_left,
            }
        )
    return {"items": result}


@app.post("/recurring/process", response_model=ProcessRecurringResponse)
async def process_recurring_item(request: ProcessRecurringRequest):
    """Record one occurrence and move the item to its next due date."""
    try:
        transaction, item = process_recurring(request.item, now=request.now, vocabulary=vocabulary)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ProcessRecurringResponse(transaction=transaction, item=item)


# ==================== GOAL ENDPOINTS ====================


@app.post("/goals/status")
async def get_goals_status(request: GoalStatusRequest):
    """Progress and days left for each goal."""
    today = request.today or date.today()
    result = []
    for goal in request.goals:
        status = goal_status(goal, today)
        result.append(
            {
                "id": goal.id,
                "name": goal.name,
                "progress_percent": round(status.progress_percent, 1),
                "remaining_amount": round(status.remaining_amount, 2),
                "days_left": status.days_left,
                "expired": status.expired,
                "completed": status.completed,
            }
        )
    return {"goals": result}


@app.post("/goals/add-funds", response_model=FinancialGoal)
async def add_goal_funds(request: AddFundsRequest):
    """Add money to a goal's saved total."""
    try:
        return add_funds(request.goal, request.amount)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.dev_mode,
    )
