"""Alert evaluation: which active alerts does a fresh quote trigger."""
from collections.abc import Iterable

from market_alerts.db.models import Alert, AlertDirection
from market_alerts.schemas import AlertTriggerEvent, Quote


def is_triggered(price: float, direction: AlertDirection, threshold: float) -> bool:
    """Inclusive on both sides: a price equal to the threshold triggers."""
    if direction is AlertDirection.ABOVE:
        return price >= threshold
    return price <= threshold


def evaluate(quote: Quote, active_alerts: Iterable[Alert]) -> list[Alert]:
    """Return the alerts the quote triggers, in the order given. Pure; no I/O."""
    return [
        alert
        for alert in active_alerts
        if alert.symbol == quote.symbol
        and is_triggered(quote.price, AlertDirection(alert.direction), alert.threshold)
    ]


def format_threshold(threshold: float) -> str:
    """100.0 -> '100', 100.5 -> '100.5'."""
    return str(int(threshold)) if float(threshold).is_integer() else repr(float(threshold))


def trigger_message(alert: Alert) -> str:
    if AlertDirection(alert.direction) is AlertDirection.ABOVE:
        return f"{alert.symbol} reached ≥ {format_threshold(alert.threshold)}"
    return f"{alert.symbol} fell ≤ {format_threshold(alert.threshold)}"


def trigger_event(alert: Alert) -> AlertTriggerEvent:
    return AlertTriggerEvent(
        alert_id=alert.id, symbol=alert.symbol, message=trigger_message(alert)
    )
