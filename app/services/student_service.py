import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import or_

from app.models.user import User, UserRole
from app.schemas.student import StudentCreateRequest, StudentUpdateRequest
from app.utils.security import hash_password
from app.utils.exceptions import NotFoundException, DuplicateEntryException

logger = logging.getLogger(__name__)


def serialize_user(u: User) -> dict:
    return {
        "id":           u.id,
        "name":         u.name,
        "email":        u.email,
        "registration": u.registration,
        "role":         u.role.value,
        "isActive":     u.isActive,
        "createdAt":    u.createdAt.isoformat(),
        "updatedAt":    u.updatedAt.isoformat(),
    }


def ensure_unique_identity(
    db: Session, email: str | None, registration: str | None, exclude_id: int | None = None,
) -> None:
    """Raise 409 if a non-deleted user already holds the email or registration."""
    if email:
        q = db.query(User).filter(User.email == email, User.deletedAt.is_(None))
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first():
            raise DuplicateEntryException("Email already registered", field="email")
    if registration:
        q = db.query(User).filter(User.registration == registration, User.deletedAt.is_(None))
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first():
            raise DuplicateEntryException("Registration number already registered", field="registration")


class StudentService:

    def _get_or_404(self, db: Session, student_id: int) -> User:
        u = db.query(User).filter(
            User.id == student_id,
            User.role == UserRole.STUDENT,
            User.deletedAt.is_(None),
        ).first()
        if not u:
            raise NotFoundException("Student")
        return u

    # ─── List ─────────────────────────────────────────────────────────────────
    def list_students(
        self, db: Session, page: int, limit: int,
        search: str | None, is_active: bool | None,
    ) -> tuple[list[dict], int]:
        q = db.query(User).filter(User.role == UserRole.STUDENT, User.deletedAt.is_(None))

        if search:
            kw = f"%{search}%"
            q = q.filter(or_(
                User.name.ilike(kw),
                User.email.ilike(kw),
                User.registration.ilike(kw),
            ))
        if is_active is not None:
            q = q.filter(User.isActive == is_active)

        total = q.count()
        items = q.order_by(User.name, User.id).offset((page - 1) * limit).limit(limit).all()
        return [serialize_user(u) for u in items], total

    # ─── Get by ID ────────────────────────────────────────────────────────────
    def get_student(self, db: Session, student_id: int) -> dict:
        return serialize_user(self._get_or_404(db, student_id))

    # ─── Create ───────────────────────────────────────────────────────────────
    def create_student(self, db: Session, data: StudentCreateRequest) -> dict:
        ensure_unique_identity(db, data.email, data.registration)

        # A soft-deleted account with the same email or registration is
        # restored instead of inserting a second row for the same person.
        deleted = db.query(User).filter(
            User.deletedAt.isnot(None),
            or_(User.email == data.email, User.registration == data.registration),
        ).order_by(User.deletedAt.desc()).first()

        if deleted:
            deleted.deletedAt    = None
            deleted.name         = data.name
            deleted.email        = data.email
            deleted.registration = data.registration
            deleted.password     = hash_password(data.password)
            deleted.role         = UserRole.STUDENT
            deleted.isActive     = True
            student = deleted
            logger.info(f"Restored soft-deleted student id={student.id} ({student.email})")
        else:
            student = User(
                name=data.name,
                email=data.email,
                registration=data.registration,
                password=hash_password(data.password),
                role=UserRole.STUDENT,
                isActive=True,
            )
            db.add(student)

        db.commit()
        db.refresh(student)
        return serialize_user(student)

    # ─── Update ───────────────────────────────────────────────────────────────
    def update_student(self, db: Session, student_id: int, data: StudentUpdateRequest) -> dict:
        u = self._get_or_404(db, student_id)

        ensure_unique_identity(
            db,
            data.email if data.email != u.email else None,
            data.registration if data.registration != u.registration else None,
            exclude_id=u.id,
        )

        if data.name:                 u.name         = data.name
        if data.email:                u.email        = data.email
        if data.registration:         u.registration = data.registration
        if data.password:             u.password     = hash_password(data.password)
        if data.isActive is not None: u.isActive     = data.isActive

        db.commit()
        db.refresh(u)
        return serialize_user(u)

    # ─── Delete (soft) ────────────────────────────────────────────────────────
    def delete_student(self, db: Session, student_id: int) -> None:
        u = self._get_or_404(db, student_id)
        u.deletedAt = datetime.now(timezone.utc)
        db.commit()
        logger.info(f"Soft-deleted student id={u.id} ({u.email})")


student_service = StudentService()
