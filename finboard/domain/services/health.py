"""Domain services for the financial health score and its insights."""

from decimal import Decimal

from finboard.domain.models import FlowTotals, HealthInsight, InsightKind
from finboard.utils.decimal_utils import round_half_up

HUNDRED = Decimal("100")
BASE_SCORE = 50
TARGET_SAVINGS_RATE = Decimal("20")
EXPENSE_JUMP = Decimal("1.2")
EXPENSE_DROP = Decimal("0.8")


def savings_rate_percent(flows: FlowTotals) -> Decimal:
    """Return savings as a percent of income, 0 without income."""
    if flows.income <= 0:
        return Decimal("0")
    return flows.net / flows.income * HUNDRED


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """Return the relative change in percent, 0 without a prior value."""
    if previous <= 0:
        return Decimal("0")
    return (current / previous - 1) * HUNDRED


def compute_health_score(
    savings_rate: Decimal,
    net_worth: Decimal,
    active_budgets: int,
    active_goals: int,
    goals_progress: Decimal,
) -> int:
    """Score overall financial health on a 0-100 scale.

    Starts at 50 and adjusts for the savings rate, the sign of net worth,
    the presence of budgets, and progress on active goals.

    Args:
        savings_rate: Savings percent over the last 30 days.
        net_worth: Net worth in the display currency.
        active_budgets: Number of active budgets.
        active_goals: Number of goals not completed.
        goals_progress: Mean percent complete of active goals.

    Returns:
        int: Score clamped to [0, 100].
    """
    score = BASE_SCORE
    if savings_rate >= TARGET_SAVINGS_RATE:
        score += 20
    elif savings_rate >= 10:
        score += 10
    elif savings_rate >= 0:
        score += 5
    else:
        score -= 10

    score += 10 if net_worth > 0 else -20

    if active_budgets > 0:
        score += 5

    if active_goals > 0:
        score += 10 if goals_progress > 50 else 5

    return max(0, min(100, score))


def build_insights(
    savings_rate: Decimal,
    recent: FlowTotals,
    previous: FlowTotals,
    active_goals: int,
    goals_progress: Decimal,
) -> list[HealthInsight]:
    """Derive human-readable insights from 30-day figures."""
    insights = []
    rate = round_half_up(savings_rate)
    if savings_rate >= TARGET_SAVINGS_RATE:
        insights.append(
            HealthInsight(
                InsightKind.SUCCESS,
                f"Great savings rate of {rate}%! You're saving more than "
                "the recommended 20%.",
            )
        )
    elif savings_rate >= 0:
        insights.append(
            HealthInsight(
                InsightKind.INFO,
                f"Your savings rate is {rate}%. Aim for 20% or more.",
            )
        )
    else:
        insights.append(
            HealthInsight(
                InsightKind.WARNING,
                "You're spending more than you earn. Consider cutting "
                "expenses.",
            )
        )

    if previous.expenses > 0:
        change = round_half_up(
            abs(percent_change(recent.expenses, previous.expenses))
        )
        if recent.expenses > previous.expenses * EXPENSE_JUMP:
            insights.append(
                HealthInsight(
                    InsightKind.WARNING,
                    f"Expenses increased {change}% compared to the previous "
                    "30 days.",
                )
            )
        elif recent.expenses < previous.expenses * EXPENSE_DROP:
            insights.append(
                HealthInsight(
                    InsightKind.SUCCESS,
                    f"Expenses decreased {change}% compared to the previous "
                    "30 days.",
                )
            )
    elif recent.expenses > 0:
        insights.append(
            HealthInsight(
                InsightKind.INFO,
                "You've started tracking expenses in the last 30 days.",
            )
        )

    if active_goals > 0:
        plural = "s" if active_goals > 1 else ""
        insights.append(
            HealthInsight(
                InsightKind.INFO,
                f"You have {active_goals} active goal{plural} with "
                f"{round_half_up(goals_progress)}% average progress.",
            )
        )
    return insights


__all__ = [
    "savings_rate_percent",
    "percent_change",
    "compute_health_score",
    "build_insights",
]
