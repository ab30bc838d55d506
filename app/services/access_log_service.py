import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.models.access_log import AccessLog
from app.models.user import User, UserRole
from app.schemas.access_log import AccessLogCreateRequest, AccessAction
from app.services.environment_service import environment_service
from app.utils.exceptions import (
    NotFoundException, ForbiddenException, StudentInactiveException,
    ActiveSessionExistsException, NoActiveSessionException,
    EnvironmentMismatchException, EnvironmentUnavailableException,
)

logger = logging.getLogger(__name__)


def _serialize(log: AccessLog) -> dict:
    return {
        "id":            log.id,
        "userId":        log.userId,
        "environmentId": log.environmentId,
        "checkIn":       log.checkIn.isoformat(),
        "checkOut":      log.checkOut.isoformat() if log.checkOut else None,
        "isOpen":        log.is_open,
        "user": {
            "id":           log.user.id,
            "name":         log.user.name,
            "registration": log.user.registration,
        },
        "environment": {
            "id":   log.environment.id,
            "name": log.environment.name,
            "type": log.environment.type.value,
        },
    }


class AccessLogService:

    def _ensure_can_act_for(self, actor: User, student_id: int) -> None:
        if actor.role != UserRole.ADMIN and actor.id != student_id:
            raise ForbiddenException("Students may only register or view their own access")

    def _open_session(self, db: Session, user_id: int) -> AccessLog | None:
        return db.query(AccessLog).filter(
            AccessLog.userId == user_id,
            AccessLog.checkOut.is_(None),
        ).order_by(AccessLog.checkIn.desc()).first()

    # ─── Check-in / Check-out ─────────────────────────────────────────────────
    def register_access(self, db: Session, data: AccessLogCreateRequest, actor: User) -> dict:
        """
        Record a check-in or check-out for a student.

        A student holds at most one open session across all environments.
        Check-out is only accepted in the environment of that open session,
        and stays possible after the student has been soft-deleted.
        """
        self._ensure_can_act_for(actor, data.studentId)

        # Deleted students are looked up too so their open sessions can close
        student = db.query(User).filter(User.id == data.studentId).first()
        if not student:
            raise NotFoundException("Student")

        active = self._open_session(db, student.id)

        if data.action == AccessAction.CHECK_IN:
            if student.deletedAt is not None:
                raise NotFoundException("Student")
            if active:
                raise ActiveSessionExistsException()
            if not student.isActive:
                raise StudentInactiveException()
            env = environment_service.get_active_or_404(db, data.environmentId)
            if not env.isActive:
                raise EnvironmentUnavailableException()

            log = AccessLog(
                userId=student.id,
                environmentId=env.id,
                checkIn=datetime.now(timezone.utc),
            )
            db.add(log)
            try:
                db.commit()
            except IntegrityError:
                # Concurrent check-in won the race for the open-session index
                db.rollback()
                logger.warning(f"Concurrent check-in rejected for user id={student.id}")
                raise ActiveSessionExistsException()
            db.refresh(log)
            logger.info(f"Check-in: user id={student.id} -> environment id={env.id}")
            return _serialize(log)

        if not active:
            raise NoActiveSessionException()
        if active.environmentId != data.environmentId:
            raise EnvironmentMismatchException()

        active.checkOut = datetime.now(timezone.utc)
        db.commit()
        db.refresh(active)
        logger.info(f"Check-out: user id={student.id} <- environment id={active.environmentId}")
        return _serialize(active)

    # ─── History ──────────────────────────────────────────────────────────────
    def list_access_logs(
        self, db: Session, actor: User, page: int, limit: int,
        student_id: int | None, environment_id: int | None, active: bool | None,
    ) -> tuple[list[dict], int]:
        q = db.query(AccessLog).options(
            joinedload(AccessLog.user), joinedload(AccessLog.environment),
        )

        # Students only ever see their own history
        if actor.role != UserRole.ADMIN:
            student_id = actor.id

        if student_id is not None:
            q = q.filter(AccessLog.userId == student_id)
        if environment_id is not None:
            q = q.filter(AccessLog.environmentId == environment_id)
        if active is True:
            q = q.filter(AccessLog.checkOut.is_(None))
        elif active is False:
            q = q.filter(AccessLog.checkOut.isnot(None))

        total = q.count()
        items = q.order_by(AccessLog.checkIn.desc(), AccessLog.id.desc()) \
                 .offset((page - 1) * limit).limit(limit).all()
        return [_serialize(log) for log in items], total

    def get_active_session(self, db: Session, student_id: int, actor: User) -> dict | None:
        self._ensure_can_act_for(actor, student_id)
        log = self._open_session(db, student_id)
        return _serialize(log) if log else None


access_log_service = AccessLogService()
