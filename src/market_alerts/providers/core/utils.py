"""Shared utilities for quote providers."""
import math


def normalize_stock_symbol(symbol: str) -> str:
    """Normalize a stock symbol (strip, uppercase)."""
    return symbol.strip().upper()


def parse_number(raw: object) -> float:
    """Parse a provider numeric field; raises ValueError when missing or not finite."""
    if raw is None:
        raise ValueError("missing numeric value")
    value = float(str(raw).strip())
    if not math.isfinite(value):
        raise ValueError(f"non-finite numeric value {raw!r}")
    return value


def parse_percent(raw: object) -> float:
    """Parse a percentage such as '1.2345%'."""
    if raw is None:
        raise ValueError("missing percent value")
    return parse_number(str(raw).strip().rstrip("%"))
