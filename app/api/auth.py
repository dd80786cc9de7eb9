"""Registration, login and user listing endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_access_token
from app.schemas.auth import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserListItem,
    UserPublic,
)
from app.services.users import authenticate_user, list_public_users, register_user

router = APIRouter()

# Handlers are plain functions so bcrypt runs in the server's thread pool, off the event loop.


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Create a partner account and return it with a session token.
    Any role in the body is ignored.
    """
    user = register_user(db, body)
    return AuthResponse(
        message="Registration successful",
        user=UserPublic.model_validate(user),
        token=create_access_token(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email (or username) and password; returns a JWT session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate_user(db, body.email, body.password)
    return AuthResponse(
        message="Login successful",
        user=UserPublic.model_validate(user),
        token=create_access_token(user),
    )


@router.get(
    "/users",
    response_model=list[UserListItem],
    responses={500: {"model": ErrorResponse}},
)
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[UserListItem]:
    """List all accounts without password hashes (debug/admin affordance)."""
    return list_public_users(db)
