"""Live streaming: push channels, polling, alert evaluation, session registry."""
from market_alerts.streaming.channel import KEEPALIVE_FRAME, PushChannel
from market_alerts.streaming.evaluator import evaluate, is_triggered
from market_alerts.streaming.registry import SessionStreamRegistry
from market_alerts.streaming.scheduler import (PollingScheduler, SessionState,
                                               StreamSession)

__all__ = [
    "KEEPALIVE_FRAME",
    "PollingScheduler",
    "PushChannel",
    "SessionState",
    "SessionStreamRegistry",
    "StreamSession",
    "evaluate",
    "is_triggered",
]
