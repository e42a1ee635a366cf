from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.core.database import translate_db_errors
from app.core.errors import validate_input
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserSignUp
from app.services.notification_service import AdminNotifier

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)
        self.notifier = AdminNotifier(db)

    def sign_up(self, data: UserSignUp | Mapping[str, Any]) -> User:
        """Create or refresh the local user for an identity-provider subject.

        Repeated calls for the same ``external_id`` update the profile and
        never notify twice.
        """
        params = validate_input(UserSignUp, data)
        with translate_db_errors(self.db):
            existing = self.repo.get_by_external_id(params.external_id)
            if existing is not None:
                existing.name = params.name  # type: ignore[assignment]
                existing.image_url = params.image_url  # type: ignore[assignment]
                self.db.commit()
                self.db.refresh(existing)
                return existing
            user = self.repo.create(params)

        logger.info("New user %s signed up", user.id)
        self.notifier.notify_user_signup(user_id=user.id, name=str(user.name))  # type: ignore[arg-type]
        return user
