"""Finance formulas: interest, loans, tips, discounts and ROI.

Rates are entered as percentages (5 means 5%). Results are money values
rounded to cents unless an output asks for other precision.
"""

import math

from .helpers import round_to, safe_div
from .registry import formula
from .snapshot import Snapshot


def _growth(rate: float, periods: float) -> float:
    """(1 + rate) ** periods without raising on overflow."""
    try:
        return math.pow(1 + rate, periods)
    except (OverflowError, ValueError):
        return math.inf


@formula("finance.simple_interest", reads=("principal", "rate", "years"))
def simple_interest(s: Snapshot, include_principal: bool = False, decimals: int = 2) -> float:
    """Simple interest earned (or final amount with include_principal)."""
    principal = s.number("principal")
    interest = principal * s.number("rate") / 100 * s.number("years")
    return round_to(principal + interest if include_principal else interest, decimals)


@formula("finance.compound_interest", reads=("principal", "rate", "years", "frequency"))
def compound_interest(s: Snapshot, interest_only: bool = False, decimals: int = 2) -> float:
    """Future value with periodic compounding (or the interest part only)."""
    principal = s.number("principal")
    frequency = s.number("frequency", 12)
    if frequency <= 0:
        return 0.0
    amount = principal * _growth(s.number("rate") / 100 / frequency, frequency * s.number("years"))
    return round_to(amount - principal if interest_only else amount, decimals)


def _monthly_payment(principal: float, annual_rate: float, years: float) -> float:
    months = years * 12
    if principal <= 0 or months <= 0:
        return 0.0
    monthly_rate = annual_rate / 100 / 12
    if monthly_rate == 0:
        return principal / months
    growth = _growth(monthly_rate, months)
    if not math.isfinite(growth) or growth == 1:
        return 0.0
    return principal * monthly_rate * growth / (growth - 1)


@formula("finance.loan_payment", reads=("principal", "rate", "years"))
def loan_payment(s: Snapshot, report: str = "payment", decimals: int = 2) -> float:
    """Amortized monthly payment; report='total' or 'interest' for loan totals."""
    principal = s.number("principal")
    payment = _monthly_payment(principal, s.number("rate"), s.number("years"))
    total_paid = payment * s.number("years") * 12
    if report == "total":
        return round_to(total_paid, decimals)
    if report == "interest":
        return round_to(max(total_paid - principal, 0.0), decimals)
    return round_to(payment, decimals)


@formula("finance.mortgage_payment", reads=("price", "down_payment", "rate", "years"))
def mortgage_payment(s: Snapshot, decimals: int = 2) -> float:
    """Monthly mortgage payment on the price minus the down payment."""
    principal = s.number("price") - s.number("down_payment")
    return round_to(_monthly_payment(principal, s.number("rate"), s.number("years")), decimals)


@formula("finance.tip", reads=("bill", "tip_percent", "people"))
def tip(s: Snapshot, per_person_total: bool = False, decimals: int = 2) -> float:
    """Tip per person (or bill plus tip per person)."""
    bill = s.number("bill")
    people = max(s.integer("people", 1), 1)
    tip_amount = bill * s.number("tip_percent") / 100
    return round_to((bill + tip_amount if per_person_total else tip_amount) / people, decimals)


@formula("finance.discount", reads=("price", "discount_percent"))
def discount(s: Snapshot, savings: bool = False, decimals: int = 2) -> float:
    """Sale price after a percentage discount (or the amount saved)."""
    price = s.number("price")
    saved = price * s.number("discount_percent") / 100
    return round_to(saved if savings else price - saved, decimals)


@formula("finance.roi", reads=("invested", "returned"))
def return_on_investment(s: Snapshot, decimals: int = 2) -> float:
    """Return on investment as a percentage of the amount invested."""
    invested = s.number("invested")
    if invested <= 0:
        return 0.0
    return round_to(safe_div(s.number("returned") - invested, invested) * 100, decimals)


@formula("finance.inflation_adjusted", reads=("amount", "rate", "years"))
def inflation_adjusted(s: Snapshot, decimals: int = 2) -> float:
    """Future cost of an amount after years of constant inflation."""
    return round_to(s.number("amount") * _growth(s.number("rate") / 100, s.number("years")), decimals)
