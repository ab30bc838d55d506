import enum
from sqlalchemy import Column, Integer, String, Boolean, Enum, Index, TIMESTAMP, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class EnvironmentType(str, enum.Enum):
    CLASSROOM  = "classroom"
    LABORATORY = "laboratory"
    STUDY_ROOM = "study_room"


class Environment(Base):
    __tablename__ = "environments"
    __table_args__ = (
        Index("uq_environments_name_active", "name", unique=True,
              postgresql_where=text('"deletedAt" IS NULL'),
              sqlite_where=text('"deletedAt" IS NULL')),
    )

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String(255), nullable=False)
    type        = Column(Enum(EnvironmentType, values_callable=lambda e: [m.value for m in e],
                              name="environment_type"), nullable=False)
    description = Column(String(500), nullable=True)
    capacity    = Column(Integer, nullable=False)
    building    = Column(String(100), nullable=True)
    floor       = Column(String(50), nullable=True)
    isActive    = Column(Boolean, default=True, nullable=False)
    createdAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                         onupdate=func.now(), nullable=False)
    deletedAt   = Column(TIMESTAMP(timezone=True), nullable=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    access_logs = relationship("AccessLog", back_populates="environment")

    def __repr__(self):
        return f"<Environment id={self.id} name={self.name} type={self.type} capacity={self.capacity}>"
