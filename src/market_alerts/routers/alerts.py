"""Alert routes. Alerts are created here; only the live stream deactivates them."""
from fastapi import APIRouter

from market_alerts.deps import CurrentUser, StoreDep
from market_alerts.schemas import AlertCreate, AlertOut

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("")
async def list_alerts(user_id: CurrentUser, store: StoreDep) -> dict[str, list[AlertOut]]:
    """All of the user's alerts (active and triggered), newest first."""
    alerts = await store.list_alerts(user_id)
    return {"alerts": [AlertOut.model_validate(a) for a in alerts]}


@router.post("")
async def create_alert(
    body: AlertCreate, user_id: CurrentUser, store: StoreDep
) -> dict[str, bool]:
    await store.create_alert(user_id, body.symbol, body.direction, body.price)
    return {"ok": True}


@router.delete("/{alert_id}")
async def delete_alert(alert_id: int, user_id: CurrentUser, store: StoreDep) -> dict[str, bool]:
    """Delete one of the user's alerts; unknown or foreign ids are ignored."""
    await store.delete_alert(user_id, alert_id)
    return {"ok": True}
