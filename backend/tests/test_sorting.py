from datetime import UTC, datetime, timedelta

import pytest

from app.core.sorting import apply_order_by
from app.models.user import User


@pytest.fixture
def users(make_user):
    now = datetime.now(UTC)
    return [
        make_user("Bravo", created_at=now - timedelta(days=2)),
        make_user("Alpha", created_at=now - timedelta(days=1)),
        make_user("Charlie", created_at=now),
    ]


def names(query):
    return [u.name for u in query.all()]


class TestApplyOrderBy:
    def test_default_is_newest_first(self, db_session, users):
        query = apply_order_by(db_session.query(User), User, None)
        assert names(query) == ["Charlie", "Alpha", "Bravo"]

    def test_field_and_direction(self, db_session, users):
        query = apply_order_by(db_session.query(User), User, "name:asc")
        assert names(query) == ["Alpha", "Bravo", "Charlie"]

        query = apply_order_by(db_session.query(User), User, "name:desc")
        assert names(query) == ["Charlie", "Bravo", "Alpha"]

    def test_direction_defaults_to_asc(self, db_session, users):
        query = apply_order_by(db_session.query(User), User, "name")
        assert names(query) == ["Alpha", "Bravo", "Charlie"]

    def test_bad_direction_keeps_default(self, db_session, users):
        query = apply_order_by(db_session.query(User), User, "name:sideways")
        assert names(query) == ["Charlie", "Bravo", "Alpha"]

    def test_field_outside_allow_list_falls_back(self, db_session, users):
        query = apply_order_by(
            db_session.query(User), User, "name:asc", allowed_fields={"created_at"}
        )
        assert names(query) == ["Charlie", "Alpha", "Bravo"]

    def test_unknown_column_falls_back(self, db_session, users):
        query = apply_order_by(db_session.query(User), User, "nope:asc")
        assert names(query) == ["Charlie", "Alpha", "Bravo"]
