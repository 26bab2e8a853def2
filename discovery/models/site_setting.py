"""SiteSetting ORM model — admin-editable key/value configuration."""

from sqlalchemy import Column, String, JSON, DateTime, func

from discovery.database import Base, utcnow


class SiteSetting(Base):
    __tablename__ = "site_settings"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=False, default=dict)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
