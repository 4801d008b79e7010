"""Persistence layer for user identity data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session, joinedload

from app.domain.entities import User
from app.infrastructure.models import CompanyFollowModel, CompanyModel, UserModel


class UserRepository:
    """Read user profiles and create users for local seeding."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.company))
            .filter(UserModel.id == user_id)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.company))
            .filter(UserModel.email == email)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.company))
            .filter(UserModel.id.in_(unique_ids))
        )
        return {model.id: self._to_entity(model) for model in query.all()}

    def create(self, user: User) -> User:
        model = UserModel(
            full_name=user.full_name,
            email=user.email,
            avatar_url=user.avatar_url,
            company_id=user.company_id,
            is_active=user.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            avatar_url=model.avatar_url,
            company_id=model.company_id,
            company_name=model.company.name if model.company else None,
            is_active=bool(model.is_active),
        )


class CompanyFollowRepository:
    """Lookups over the company follow graph."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_follower_ids(self, company_id: int) -> list[int]:
        query = (
            self.session.query(CompanyFollowModel.user_id)
            .join(UserModel, UserModel.id == CompanyFollowModel.user_id)
            .filter(CompanyFollowModel.company_id == company_id)
            .filter(UserModel.is_active.is_(True))
            .order_by(CompanyFollowModel.followed_at.asc(), CompanyFollowModel.id.asc())
        )
        return [user_id for (user_id,) in query.all()]

    def follow(self, user_id: int, company_id: int) -> None:
        self.session.add(CompanyFollowModel(user_id=user_id, company_id=company_id))
        self.session.commit()

    def create_company(self, name: str) -> int:
        model = CompanyModel(name=name)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return model.id


__all__ = ["CompanyFollowRepository", "UserRepository"]
