"""Account routes: register, login, logout, me."""
import logging

from fastapi import APIRouter, HTTPException, Request

from market_alerts.deps import CurrentUser, StoreDep
from market_alerts.schemas import Credentials
from market_alerts.services import hash_password, verify_password

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register")
async def register(body: Credentials, request: Request, store: StoreDep) -> dict[str, bool]:
    """Create an account and log it in. 409 if the email is taken."""
    user = await store.create_user(body.email, hash_password(body.password))
    if user is None:
        raise HTTPException(status_code=409, detail="Email already registered")
    request.session["user_id"] = user.id
    logger.info("Registered user %s", user.id)
    return {"ok": True}


@router.post("/login")
async def login(body: Credentials, request: Request, store: StoreDep) -> dict[str, bool]:
    user = await store.get_user_by_email(body.email)
    if user is None or not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user_id"] = user.id
    return {"ok": True}


@router.post("/logout")
async def logout(request: Request) -> dict[str, bool]:
    request.session.clear()
    return {"ok": True}


@router.get("/me")
async def me(user_id: CurrentUser, store: StoreDep) -> dict:
    user = await store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return {"user": {"id": user.id, "email": user.email, "created_at": user.created_at}}
