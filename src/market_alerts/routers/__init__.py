"""API routers.

Includes routes for:
- /api/register, /api/login, /api/logout, /api/me - session auth
- /api/watchlist - watched symbols
- /api/alerts - one-shot price alerts
- /api/search, /api/quote, /api/historic - quote provider proxies
- /api/stream - live quote/alert event stream
"""
from market_alerts.routers.alerts import router as alerts_router
from market_alerts.routers.auth import router as auth_router
from market_alerts.routers.quotes import router as quotes_router
from market_alerts.routers.stream import router as stream_router
from market_alerts.routers.watchlist import router as watchlist_router

__all__ = [
    "alerts_router",
    "auth_router",
    "quotes_router",
    "stream_router",
    "watchlist_router",
]
