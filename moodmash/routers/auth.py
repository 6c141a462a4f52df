# auth router — signup, login, token refresh and current user

import logging
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import DuplicateKeyError

from moodmash.dependencies import get_current_user
from moodmash.models.user import RefreshRequest, TokenResponse, UserCreate, UserLogin, UserResponse
from moodmash.services.auth_service import (
    REFRESH,
    create_token_pair,
    decode_token,
    hash_password,
    verify_password,
)
from moodmash.services.db import Database, get_db

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _email_taken() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="An account with this email already exists",
    )


def _tokens_for(user_id: str) -> TokenResponse:
    pair = create_token_pair(user_id)
    return TokenResponse(accessToken=pair["access_token"], refreshToken=pair["refresh_token"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: UserCreate, db: Database = Depends(get_db)):
    """register a new account and sign it in"""
    if await db.users.find_one({"email": body.email}):
        raise _email_taken()

    doc = {
        "email": body.email,
        "hashed_password": hash_password(body.password),
        "name": body.name,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    try:
        result = await db.users.insert_one(doc)
    except DuplicateKeyError:
        # concurrent signup with the same email
        raise _email_taken()
    user_id = str(result.inserted_id)

    logger.info(f"User registered: {user_id}")
    return _tokens_for(user_id)


@router.post("/login", response_model=TokenResponse)
async def login(body: UserLogin, db: Database = Depends(get_db)):
    user = await db.users.find_one({"email": body.email})
    if not user or not verify_password(body.password, user.get("hashed_password", "")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    logger.info(f"User logged in: {user['_id']}")
    return _tokens_for(str(user["_id"]))


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, db: Database = Depends(get_db)):
    """exchange a refresh token for a new token pair"""
    payload = decode_token(body.refresh_token, expected_type=REFRESH)
    if payload is None or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    try:
        user = await db.users.find_one({"_id": ObjectId(payload["sub"])})
    except InvalidId:
        user = None
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return _tokens_for(str(user["_id"]))


@router.get("/me", response_model=UserResponse)
async def me(current_user: dict = Depends(get_current_user)):
    return UserResponse(
        id=current_user["id"],
        email=current_user["email"],
        name=current_user.get("name", ""),
        createdAt=current_user.get("created_at", ""),
    )
