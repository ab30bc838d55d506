import enum
from sqlalchemy import Column, Integer, String, Boolean, Enum, Index, TIMESTAMP, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class UserRole(str, enum.Enum):
    ADMIN   = "admin"
    STUDENT = "student"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        # Uniqueness only applies to rows that are not soft-deleted
        Index("uq_users_email_active", "email", unique=True,
              postgresql_where=text('"deletedAt" IS NULL'),
              sqlite_where=text('"deletedAt" IS NULL')),
        Index("uq_users_registration_active", "registration", unique=True,
              postgresql_where=text('"deletedAt" IS NULL'),
              sqlite_where=text('"deletedAt" IS NULL')),
    )

    id           = Column(Integer, primary_key=True, index=True)
    name         = Column(String(150), nullable=False)
    email        = Column(String(255), nullable=False, index=True)
    registration = Column(String(50), nullable=True, index=True)
    password     = Column(String(255), nullable=False)
    role         = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e],
                               name="user_role"),
                          default=UserRole.STUDENT, nullable=False)
    isActive     = Column(Boolean, default=True, nullable=False)
    createdAt    = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt    = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                          onupdate=func.now(), nullable=False)
    deletedAt    = Column(TIMESTAMP(timezone=True), nullable=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    access_logs = relationship("AccessLog", back_populates="user")

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
