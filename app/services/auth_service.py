import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.models.user import User, UserRole
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.student_service import serialize_user, ensure_unique_identity
from app.utils.security import verify_password, hash_password, create_access_token
from app.utils.exceptions import UnauthorizedException, AccountInactiveException

logger = logging.getLogger(__name__)


class AuthService:

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        user = db.query(User).filter(
            User.email == data.email,
            User.deletedAt.is_(None),
        ).first()

        if not user or not verify_password(data.password, user.password):
            raise UnauthorizedException("Invalid email or password")

        if not user.isActive:
            raise AccountInactiveException()

        access_token = create_access_token(user.id, user.email, user.role.value)
        logger.info(f"User id={user.id} logged in")

        return {
            "accessToken": access_token,
            "tokenType":   "Bearer",
            "expiresIn":   settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": {
                "id":           user.id,
                "name":         user.name,
                "email":        user.email,
                "registration": user.registration,
                "role":         user.role.value,
                "isActive":     user.isActive,
            }
        }

    # ─── Register ─────────────────────────────────────────────────────────────
    def register(self, db: Session, data: RegisterRequest) -> dict:
        """Self-service sign-up. Always creates a student account."""
        ensure_unique_identity(db, data.email, data.registration)

        user = User(
            name=data.name,
            email=data.email,
            registration=data.registration,
            password=hash_password(data.password),
            role=UserRole.STUDENT,
            isActive=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"New student registered: id={user.id} ({user.email})")
        return serialize_user(user)

    # ─── Profile ──────────────────────────────────────────────────────────────
    def get_profile(self, user: User) -> dict:
        return serialize_user(user)


auth_service = AuthService()
