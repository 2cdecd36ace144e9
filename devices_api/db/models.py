"""SQLAlchemy ORM models."""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from devices_api.infrastructure.database.base import Base


class Device(Base):
    __tablename__ = "devices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False, index=True)
    state = Column(String(20), nullable=False, index=True)
    creation_time = Column(DateTime, nullable=False, server_default=func.now())
