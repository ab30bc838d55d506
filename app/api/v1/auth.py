from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterRequest, LoginResponse
from app.schemas.student import StudentOut
from app.schemas.common import SuccessResponse, ERROR_RESPONSES, success_response
from app.services.auth_service import auth_service

router = APIRouter(prefix="/auth", responses=ERROR_RESPONSES)


# ─── POST /auth/register ──────────────────────────────────────────────────────
@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new student account",
    response_model=SuccessResponse[StudentOut],
)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new student.
    - Email and registration number must be unique among active accounts.
    - Password minimum 6 characters.
    """
    user = auth_service.register(db, data)
    return success_response("Registration successful", user)


# ─── POST /auth/login ─────────────────────────────────────────────────────────
@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login and receive an access token",
    response_model=SuccessResponse[LoginResponse],
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    result = auth_service.login(db, data)
    return success_response("Login successful", result)


# ─── GET /auth/me ─────────────────────────────────────────────────────────────
@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Get current authenticated user profile",
    response_model=SuccessResponse[StudentOut],
)
def get_me(current_user: User = Depends(get_current_user)):
    return success_response("User profile retrieved", auth_service.get_profile(current_user))
