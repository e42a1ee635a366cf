"""Tests for UUID vs external-id reference resolution."""

from uuid import UUID, uuid4

from app.core.identity import ByCanonicalId, ByExternalId, resolve_ref
from app.repositories.user_repository import UserRepository
from app.repositories.video_repository import VideoRepository


class TestResolveRef:
    def test_canonical_uuid_string(self):
        raw = "3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b"
        assert resolve_ref(raw) == ByCanonicalId(UUID(raw))

    def test_uppercase_uuid_is_canonical(self):
        raw = "3F2B8C1E-9A4D-4E6F-8B7A-1C2D3E4F5A6B"
        assert resolve_ref(raw) == ByCanonicalId(UUID(raw))

    def test_uuid_instance(self):
        value = uuid4()
        assert resolve_ref(value) == ByCanonicalId(value)

    def test_external_id(self):
        assert resolve_ref("user_2abcXYZ") == ByExternalId("user_2abcXYZ")

    def test_uuid_without_dashes_is_external(self):
        raw = uuid4().hex
        assert resolve_ref(raw) == ByExternalId(raw)

    def test_uuid_with_extra_text_is_external(self):
        raw = f"{uuid4()}-extra"
        assert resolve_ref(raw) == ByExternalId(raw)

    def test_surrounding_whitespace_is_ignored(self):
        value = uuid4()
        assert resolve_ref(f"  {value} ") == ByCanonicalId(value)


class TestRefLookups:
    def test_user_by_either_ref(self, db_session, make_user):
        user = make_user("Lookup", external_id="ext_lookup")
        repo = UserRepository(db_session)

        assert repo.get_by_ref(resolve_ref(str(user.id))).id == user.id
        assert repo.get_by_ref(resolve_ref("ext_lookup")).id == user.id
        assert repo.get_by_ref(resolve_ref("missing")) is None

    def test_video_by_upload_id(self, db_session, make_user, make_video):
        video = make_video(make_user(), upload_id="asset_123")
        repo = VideoRepository(db_session)

        assert repo.get_by_ref(resolve_ref("asset_123")).id == video.id
        assert repo.get_by_ref(resolve_ref(str(video.id))).id == video.id
        assert repo.get_by_ref(resolve_ref(str(uuid4()))) is None
