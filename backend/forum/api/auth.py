"""
Auth routes: register (role USER), login (JWT), GET /api/auth/me.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from forum.database import get_db
from forum.models.user import User
from forum.schemas.auth import RegisterRequest, LoginRequest, AuthResponse, UserResponse
from forum.services.auth import authenticate, create_access_token, register_user
from forum.api.deps import get_current_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.id, user.email, user.role),
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user (role USER) and return a token. Duplicate email -> 409."""
    user = register_user(db, data.name, data.email, data.password)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Login with email/password; returns JWT."""
    return _auth_response(authenticate(db, data.email, data.password))


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    """Return current user (id, name, email, role)."""
    return UserResponse(id=str(current_user.id), name=current_user.name, email=current_user.email, role=current_user.role)
