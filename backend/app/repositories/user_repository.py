from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.identity import ByCanonicalId, EntityRef
from app.core.sorting import apply_order_by
from app.models.user import User
from app.repositories.filters import like_pattern
from app.schemas.user import UserListParams, UserSignUp

SORTABLE_FIELDS = ("created_at", "updated_at", "name", "role")


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def _ref_filter(self, ref: EntityRef):  # type: ignore[no-untyped-def]
        if isinstance(ref, ByCanonicalId):
            return User.id == ref.id
        return User.external_id == ref.external_id

    def get_by_id(self, user_id: UUID) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_external_id(self, external_id: str) -> User | None:
        return self.db.query(User).filter(User.external_id == external_id).first()

    def get_by_ref(self, ref: EntityRef) -> User | None:
        return self.db.query(User).filter(self._ref_filter(ref)).first()

    def create(self, data: UserSignUp) -> User:
        user = User(**data.model_dump())
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_all(self, params: UserListParams) -> tuple[list[User], int]:
        query = self.db.query(User)
        if params.search:
            pattern = like_pattern(params.search)
            query = query.filter(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.external_id.ilike(pattern, escape="\\"),
                )
            )
        if params.role != "all":
            query = query.filter(User.role == params.role)
        if params.banned == "banned":
            query = query.filter(User.is_banned == True)  # noqa: E712
        elif params.banned == "active":
            query = query.filter(User.is_banned == False)  # noqa: E712

        total = query.count()
        query = apply_order_by(query, User, params.order_by, allowed_fields=SORTABLE_FIELDS)
        return query.offset(params.offset).limit(params.limit).all(), total

    def get_banned(self, limit: int) -> list[User]:
        return (
            self.db.query(User)
            .filter(User.is_banned == True)  # noqa: E712
            .order_by(User.updated_at.desc())
            .limit(limit)
            .all()
        )

    def update_by_ref(self, ref: EntityRef, values: dict[str, object]) -> User | None:
        """Apply a single-row UPDATE and return the fresh row, or None if nothing matched."""
        count = (
            self.db.query(User)
            .filter(self._ref_filter(ref))
            .update(values, synchronize_session="fetch")
        )
        self.db.commit()
        if count == 0:
            return None
        return self.get_by_ref(ref)

    def delete_by_ref(self, ref: EntityRef) -> bool:
        user = self.get_by_ref(ref)
        if not user:
            return False
        self.db.delete(user)
        self.db.commit()
        return True
