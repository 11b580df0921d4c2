from sqlalchemy import Column, String, ForeignKey, DateTime, Text, Table, Index
from datetime import datetime
from .db import Base
from sqlalchemy.orm import relationship
import uuid


def _new_id() -> str:
    return str(uuid.uuid4())


# Membership: many-to-many between users and organisations, independent of creatorship
user_organisations = Table(
    "user_organisations",
    Base.metadata,
    Column("user_id", String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("org_id", String, ForeignKey("organisations.id", ondelete="CASCADE"), primary_key=True),
    Index("ix_user_organisations_org_id", "org_id"),
)


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=_new_id)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    organisations = relationship("Organisation", secondary=user_organisations, back_populates="members")
    created_organisations = relationship("Organisation", back_populates="creator")

    def to_dict(self) -> dict:
        """Public profile; never includes the password hash."""
        return {
            "userId": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
        }


class Organisation(Base):
    __tablename__ = "organisations"
    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    description = Column(Text, default="", nullable=False)
    created_by = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    creator = relationship("User", back_populates="created_organisations")
    members = relationship("User", secondary=user_organisations, back_populates="organisations")

    def to_dict(self) -> dict:
        return {
            "orgId": self.id,
            "name": self.name,
            "description": self.description,
        }
