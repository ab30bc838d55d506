from sqlalchemy import Column, Integer, ForeignKey, Index, TIMESTAMP, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class AccessLog(Base):
    """
    One check-in/check-out session of a user in an environment.

    A row with checkOut = NULL is an open session. Rows are inserted on
    check-in, stamped once on check-out and never deleted.
    """
    __tablename__ = "access_logs"
    __table_args__ = (
        # At most one open session per user, system-wide
        Index("uq_access_logs_open_session", "userId", unique=True,
              postgresql_where=text('"checkOut" IS NULL'),
              sqlite_where=text('"checkOut" IS NULL')),
        Index("ix_access_logs_environment_open", "environmentId", "checkOut"),
    )

    id            = Column(Integer, primary_key=True, index=True)
    userId        = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    environmentId = Column(Integer, ForeignKey("environments.id"), nullable=False)
    checkIn       = Column(TIMESTAMP(timezone=True), nullable=False)
    checkOut      = Column(TIMESTAMP(timezone=True), nullable=True)
    createdAt     = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    user        = relationship("User", back_populates="access_logs")
    environment = relationship("Environment", back_populates="access_logs")

    @property
    def is_open(self) -> bool:
        return self.checkOut is None

    def __repr__(self):
        return (f"<AccessLog id={self.id} userId={self.userId} "
                f"environmentId={self.environmentId} open={self.is_open}>")
