import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import or_

from app.models.environment import Environment
from app.schemas.environment import EnvironmentCreateRequest, EnvironmentUpdateRequest
from app.utils.exceptions import NotFoundException, DuplicateEntryException

logger = logging.getLogger(__name__)


def serialize_environment(e: Environment) -> dict:
    return {
        "id":          e.id,
        "name":        e.name,
        "type":        e.type.value,
        "description": e.description,
        "capacity":    e.capacity,
        "building":    e.building,
        "floor":       e.floor,
        "isActive":    e.isActive,
        "createdAt":   e.createdAt.isoformat(),
        "updatedAt":   e.updatedAt.isoformat(),
    }


class EnvironmentService:

    def get_active_or_404(self, db: Session, environment_id: int) -> Environment:
        e = db.query(Environment).filter(
            Environment.id == environment_id,
            Environment.deletedAt.is_(None),
        ).first()
        if not e:
            raise NotFoundException("Environment")
        return e

    def _ensure_name_free(self, db: Session, name: str, exclude_id: int | None = None) -> None:
        q = db.query(Environment).filter(Environment.name == name, Environment.deletedAt.is_(None))
        if exclude_id is not None:
            q = q.filter(Environment.id != exclude_id)
        if q.first():
            raise DuplicateEntryException("An active environment with this name already exists",
                                          field="name")

    def list_environments(
        self, db: Session, page: int, limit: int,
        search: str | None, env_type: str | None, is_active: bool | None,
    ) -> tuple[list[dict], int]:
        q = db.query(Environment).filter(Environment.deletedAt.is_(None))

        if search:
            kw = f"%{search}%"
            q = q.filter(or_(Environment.name.ilike(kw), Environment.building.ilike(kw)))
        if env_type:
            q = q.filter(Environment.type == env_type)
        if is_active is not None:
            q = q.filter(Environment.isActive == is_active)

        total = q.count()
        items = q.order_by(Environment.name).offset((page - 1) * limit).limit(limit).all()
        return [serialize_environment(e) for e in items], total

    def get_environment(self, db: Session, environment_id: int) -> dict:
        return serialize_environment(self.get_active_or_404(db, environment_id))

    def create_environment(self, db: Session, data: EnvironmentCreateRequest) -> dict:
        self._ensure_name_free(db, data.name)

        deleted = db.query(Environment).filter(
            Environment.name == data.name,
            Environment.deletedAt.isnot(None),
        ).order_by(Environment.deletedAt.desc()).first()

        if deleted:
            env = deleted
            env.deletedAt = None
            env.isActive  = True
            logger.info(f"Restored soft-deleted environment id={env.id} '{env.name}'")
        else:
            env = Environment(name=data.name, isActive=True)
            db.add(env)

        env.type        = data.type
        env.description = data.description
        env.capacity    = data.capacity
        env.building    = data.building
        env.floor       = data.floor

        db.commit()
        db.refresh(env)
        return serialize_environment(env)

    def update_environment(self, db: Session, environment_id: int,
                           data: EnvironmentUpdateRequest) -> dict:
        env = self.get_active_or_404(db, environment_id)

        if data.name and data.name != env.name:
            self._ensure_name_free(db, data.name, exclude_id=env.id)

        # Only fields present in the request body are applied
        for field, value in data.model_dump(exclude_unset=True).items():
            if field in ("name", "type", "capacity", "isActive") and value is None:
                continue
            setattr(env, field, value)

        db.commit()
        db.refresh(env)
        return serialize_environment(env)

    def delete_environment(self, db: Session, environment_id: int) -> None:
        env = self.get_active_or_404(db, environment_id)
        env.deletedAt = datetime.now(timezone.utc)
        db.commit()
        logger.info(f"Soft-deleted environment id={env.id} '{env.name}'")


environment_service = EnvironmentService()
