"""Savings goal tracking."""

from dataclasses import dataclass
from datetime import date

from backend.models import FinancialGoal
from backend.services.validation import validate_positive_amount


def goal_progress(current: float, target: float) -> float:
    """Percent of target reached, clamped to 0-100."""
    if target == 0:
        return 0.0
    return min(100.0, max(0.0, (current / target) * 100))


def days_left(deadline: date, today: date) -> int:
    return (deadline - today).days


@dataclass
class GoalStatus:
    """Progress snapshot of one goal."""

    goal: FinancialGoal
    progress_percent: float
    remaining_amount: float
    days_left: int
    expired: bool
    completed: bool


def goal_status(goal: FinancialGoal, today: date) -> GoalStatus:
    remaining_days = days_left(goal.deadline, today)
    return GoalStatus(
        goal=goal,
        progress_percent=goal_progress(goal.current_amount, goal.target_amount),
        remaining_amount=max(0.0, goal.target_amount - goal.current_amount),
        days_left=remaining_days,
        expired=remaining_days <= 0,
        completed=goal.current_amount >= goal.target_amount,
    )


def add_funds(goal: FinancialGoal, amount: float) -> FinancialGoal:
    """
    Return a copy of goal with amount added to its saved total.

    Raises:
        ValidationError: If amount is not positive
    """
    validate_positive_amount(amount)
    return goal.model_copy(update={"current_amount": goal.current_amount + amount})


def total_savings(goals: list[FinancialGoal]) -> float:
    """Money saved across all goals."""
    return sum(goal.current_amount for goal in goals)
