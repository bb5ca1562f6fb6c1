"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.api.dependencies import Identity, get_current_identity, get_token_service
from src.database import get_db
from src.schemas.auth import LoginResponse, UserCredentials, UserResponse
from src.services.auth import (
    authenticate_user,
    create_user,
    get_user_by_id,
    get_user_by_username,
)
from src.services.tokens import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    credentials: UserCredentials,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    try:
        if get_user_by_username(db, credentials.username):
            logger.info(f"Registration rejected, username taken: {credentials.username}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username already exists",
            )
        user = create_user(db, credentials.username, credentials.password)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same username
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        ) from None
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error registering user")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user",
        ) from None

    logger.info(f"Registered user {user.id}")
    return user


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserCredentials,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with username and password, returning a bearer token."""
    try:
        user = authenticate_user(db, credentials.username, credentials.password)
    except SQLAlchemyError:
        logger.exception("Database error retrieving user for login")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        ) from None

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return LoginResponse(token=tokens.issue(user.id))


@router.get("/me", response_model=UserResponse)
def get_me(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user information."""
    user = get_user_by_id(db, identity.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
