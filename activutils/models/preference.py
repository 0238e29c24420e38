from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from activutils.db.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Preference(Base):
    __tablename__ = "preferences"

    key = Column(String(100), primary_key=True)
    value = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Preference {self.key}={self.value!r}>"
