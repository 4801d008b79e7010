"""SQLAlchemy models for the identity data messaging reads from."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class CompanyModel(Base):
    """Employer company a user may belong to or follow."""

    __tablename__ = "company"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)


class UserModel(Base):
    """Database representation of a platform user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    avatar_url = Column(String(500), nullable=True)
    company_id = Column(Integer, ForeignKey("company.id"), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    company = relationship("CompanyModel", lazy="joined")


class CompanyFollowModel(Base):
    """A job seeker following a company to hear about its new jobs."""

    __tablename__ = "company_follow"
    __table_args__ = (UniqueConstraint("user_id", "company_id", name="uq_company_follow"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("company.id"), nullable=False, index=True)
    followed_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["CompanyFollowModel", "CompanyModel", "UserModel"]
