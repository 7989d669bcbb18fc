from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.users import User
from app.schemas.user import LoginResponse, UserCreate, UserLogin, UserResponse
from app.core.auth import get_current_user
from app.core.rate_limiter import limiter
from app.services.user_service import authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ---------------- REGISTER ----------------
@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
def register(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    register_user(db, user_data.username, user_data.password)

    return {"message": "User registered successfully"}


# ---------------- LOGIN (TOKEN-BASED) ----------------
@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(request: Request, credentials: UserLogin, db: Session = Depends(get_db)):
    token, user = authenticate_user(db, credentials.username, credentials.password)

    return LoginResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


# ---------------- CURRENT USER ----------------
@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user


# ---------------- LOGOUT ----------------
@router.post("/logout")
def logout():
    # Tokens are stateless; the client discards its copy
    return {"message": "Logged out successfully"}
