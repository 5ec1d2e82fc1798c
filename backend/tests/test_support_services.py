"""
Tests for auth, media, social tasks, cache revalidation and integrations.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
import uuid

import pytest

from factories import NOW, make_post
from src.config.settings import settings
from src.shared.adapters.indexing_adapter import PingResult
from src.shared.adapters.storage_adapter import StorageError
from src.shared.db.session import discard_after_commit, run_after_commit
from src.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DuplicateResourceError,
    ExternalServiceError,
    ValidationError,
)
from src.shared.models import SocialPlatform, SocialTaskStatus, UserRole
from src.shared.services.auth_service import AuthService
from src.shared.services.cache_service import FEED_PATHS, CacheService
from src.shared.services.integration_service import IntegrationService
from src.shared.services.media_service import MediaService, storage_key
from src.shared.services.social_service import SocialService
from src.shared.utils.security import SecurityUtils


# ═══════════════════════════════════════════════════════════════════════════════
# AUTH
# ═══════════════════════════════════════════════════════════════════════════════


class TestAuthService:
    @pytest.fixture
    def service(self, mock_session):
        svc = AuthService(mock_session)
        svc.repo = AsyncMock()
        return svc

    @pytest.mark.asyncio
    async def test_register_creates_reader(self, service):
        service.repo.email_exists.return_value = False
        service.repo.create.side_effect = lambda **kw: SimpleNamespace(id=uuid.uuid4(), **kw)

        profile, token, expires_in = await service.register(" New@InshortBD.com ", "hunter22", "New")

        assert profile.email == "new@inshortbd.com"
        assert profile.role == UserRole.READER
        assert SecurityUtils.verify_password("hunter22", profile.password_hash)
        payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
        assert payload["user_id"] == str(profile.id)
        assert expires_in == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    @pytest.mark.asyncio
    async def test_register_duplicate(self, service):
        service.repo.email_exists.return_value = True
        with pytest.raises(DuplicateResourceError):
            await service.register("taken@inshortbd.com", "hunter22")

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, service, editor):
        editor.password_hash = SecurityUtils.hash_password("right-one")
        service.repo.get_by_email.return_value = editor

        with pytest.raises(AuthenticationError):
            await service.login(editor.email, "wrong-one")

    @pytest.mark.asyncio
    async def test_only_admins_change_roles(self, service, editor):
        with pytest.raises(AuthorizationError):
            await service.update_role(editor, uuid.uuid4(), UserRole.ADMIN)


# ═══════════════════════════════════════════════════════════════════════════════
# MEDIA
# ═══════════════════════════════════════════════════════════════════════════════


class TestMediaService:
    @pytest.fixture
    def storage(self):
        return MagicMock()

    @pytest.fixture
    def service(self, mock_session, storage):
        svc = MediaService(mock_session, storage=storage)
        svc.repo = AsyncMock()
        return svc

    def test_storage_key(self):
        assert storage_key("Photo.JPG", "image/jpeg", now_ms=1700).startswith("1700_")
        assert storage_key("Photo.JPG", "image/jpeg", now_ms=1700).endswith(".jpg")
        assert storage_key("blob", "image/png", now_ms=1).endswith(".png")

    @pytest.mark.asyncio
    async def test_rejects_non_images(self, service, editor):
        with pytest.raises(ValidationError):
            await service.upload(editor, "a.pdf", "application/pdf", b"%PDF")
        service.storage.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_large_files(self, service, editor):
        with patch.object(settings, "MEDIA_MAX_UPLOAD_BYTES", 3):
            with pytest.raises(ValidationError):
                await service.upload(editor, "a.png", "image/png", b"1234")

    @pytest.mark.asyncio
    async def test_storage_failure(self, service, editor, storage):
        storage.upload.side_effect = StorageError("denied")
        with pytest.raises(ExternalServiceError):
            await service.upload(editor, "a.png", "image/png", b"png")
        service.repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_row_failure_removes_object(self, service, editor, storage):
        service.repo.create.side_effect = RuntimeError("insert failed")

        with pytest.raises(RuntimeError):
            await service.upload(editor, "a.png", "image/png", b"png")

        key = storage.upload.call_args.args[0]
        storage.delete.assert_called_once_with(key)

    @pytest.mark.asyncio
    async def test_upload_records_metadata(self, service, editor, storage):
        service.repo.create.return_value = SimpleNamespace(id=uuid.uuid4())

        await service.upload(
            editor, "a.png", "image/png", b"png", {"alt_text": "Flood", "tags": ("weather",)}
        )

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["file_size"] == 3
        assert kwargs["alt_text"] == "Flood"
        assert kwargs["tags"] == ["weather"]
        assert kwargs["uploaded_by"] == editor.id

    @pytest.mark.asyncio
    async def test_object_removed_only_after_commit(self, service, editor, storage, mock_session):
        media = SimpleNamespace(id=uuid.uuid4(), file_path="1700_ab.png")
        service.repo.get.return_value = media

        await service.delete_media(editor, media.id)

        service.repo.delete.assert_awaited_once_with(media.id)
        storage.delete.assert_not_called()

        await run_after_commit(mock_session)
        storage.delete.assert_called_once_with("1700_ab.png")

    @pytest.mark.asyncio
    async def test_failed_commit_keeps_object(self, service, editor, storage, mock_session):
        service.repo.get.return_value = SimpleNamespace(id=uuid.uuid4(), file_path="1700_ab.png")

        await service.delete_media(editor, uuid.uuid4())
        discard_after_commit(mock_session)
        await run_after_commit(mock_session)

        storage.delete.assert_not_called()


# ═══════════════════════════════════════════════════════════════════════════════
# SOCIAL TASKS
# ═══════════════════════════════════════════════════════════════════════════════


class TestSocialService:
    @pytest.fixture
    def service(self, mock_session):
        svc = SocialService(mock_session)
        svc.repo = AsyncMock()
        svc.post_repo = AsyncMock()
        return svc

    @pytest.mark.asyncio
    async def test_article_url_from_post(self, service, editor):
        post = make_post(slug="budget")
        service.post_repo.get.return_value = post
        service.repo.create.return_value = SimpleNamespace(id=uuid.uuid4())

        with patch.object(settings, "SITE_URL", "https://inshortbd.com"):
            await service.create_task(
                editor, platform=SocialPlatform.FACEBOOK, task_title="Share budget", post_id=post.id
            )

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["article_url"] == "https://inshortbd.com/news/budget"
        assert kwargs["status"] == SocialTaskStatus.PENDING

    @pytest.mark.asyncio
    async def test_complete_requires_link(self, service, editor):
        with pytest.raises(ValidationError):
            await service.complete_task(editor, uuid.uuid4(), "  ")

    @pytest.mark.asyncio
    async def test_assignee_completes(self, service, reader):
        task = SimpleNamespace(id=uuid.uuid4(), assigned_to=reader.id)
        service.repo.get.return_value = task

        await service.complete_task(reader, task.id, " https://facebook.com/p/1 ")

        assert service.repo.add_completion.await_args.kwargs["completion_link"] == "https://facebook.com/p/1"
        service.repo.apply.assert_awaited_once_with(task, status=SocialTaskStatus.COMPLETED)

    @pytest.mark.asyncio
    async def test_other_reader_cannot_complete(self, service, reader):
        service.repo.get.return_value = SimpleNamespace(id=uuid.uuid4(), assigned_to=uuid.uuid4())
        with pytest.raises(AuthorizationError):
            await service.complete_task(reader, uuid.uuid4(), "https://x.com/p/1")


# ═══════════════════════════════════════════════════════════════════════════════
# CACHE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_post_revalidation_runs_after_commit(mock_session):
    redis = MagicMock()
    redis.delete_pages.return_value = 6

    CacheService(redis=redis).revalidate_posts_on_commit(mock_session, ["a", None, "b"])
    redis.delete_pages.assert_not_called()

    await run_after_commit(mock_session)

    paths = redis.delete_pages.call_args.args
    assert paths == (*FEED_PATHS, "/", "/news/a", "/news/b")


@pytest.mark.asyncio
async def test_failing_hook_does_not_stop_the_rest(mock_session):
    redis = MagicMock()
    redis.delete_pages.side_effect = [ConnectionError("redis down"), 1]
    cache = CacheService(redis=redis)

    cache.revalidate_on_commit(mock_session, "/feed.xml")
    cache.revalidate_on_commit(mock_session, "/sitemap.xml")
    await run_after_commit(mock_session)

    assert redis.delete_pages.call_count == 2
    assert mock_session.info == {}


def test_revalidate_nothing():
    redis = MagicMock()
    assert CacheService(redis=redis).revalidate() == 0
    redis.delete_pages.assert_not_called()


# ═══════════════════════════════════════════════════════════════════════════════
# INTEGRATIONS
# ═══════════════════════════════════════════════════════════════════════════════


class TestIntegrationService:
    @pytest.fixture
    def indexing(self):
        mock = MagicMock()
        mock.is_configured = True
        mock.submit_urls = AsyncMock(return_value=PingResult(ok=True, status_code=200))
        mock.ping_websub = AsyncMock(return_value=PingResult(ok=True, status_code=204))
        return mock

    @pytest.fixture
    def redis(self):
        mock = MagicMock()
        mock.get_json.return_value = None
        return mock

    @pytest.fixture
    def service(self, mock_session, indexing, redis):
        link_preview = MagicMock()
        link_preview.fetch = AsyncMock(return_value={"success": 1, "link": "https://example.org"})
        return IntegrationService(
            mock_session,
            unsplash=MagicMock(),
            link_preview=link_preview,
            indexing=indexing,
            redis=redis,
        )

    @pytest.mark.asyncio
    async def test_link_preview_is_cached(self, service, redis):
        await service.link_preview("example.org")

        redis.get_json.assert_called_once_with("link-preview:https://example.org")
        redis.set_json.assert_called_once_with(
            "link-preview:https://example.org",
            {"success": 1, "link": "https://example.org"},
            ttl=3600,
        )

    @pytest.mark.asyncio
    async def test_link_preview_cache_hit(self, service, redis):
        redis.get_json.return_value = {"success": 1, "link": "cached"}

        assert (await service.link_preview("example.org"))["link"] == "cached"
        service.link_preview.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_indexnow_requires_key(self, service, indexing):
        indexing.is_configured = False
        with pytest.raises(ConfigurationError):
            await service.submit_indexnow(now=NOW)

    @pytest.mark.asyncio
    async def test_indexnow_submits_recent_posts(self, service, indexing):
        repo = AsyncMock()
        repo.list_published_since.return_value = [make_post(slug="a"), make_post(slug="b")]

        with patch("src.shared.services.integration_service.PostRepository", return_value=repo), \
             patch.object(settings, "SITE_URL", "https://inshortbd.com"):
            result = await service.submit_indexnow(now=NOW)

        assert result == {"success": True, "submitted": 2, "websub": True}
        indexing.submit_urls.assert_awaited_once_with(
            ["https://inshortbd.com/news/a", "https://inshortbd.com/news/b"]
        )

    @pytest.mark.asyncio
    async def test_indexnow_nothing_recent(self, service, indexing):
        repo = AsyncMock()
        repo.list_published_since.return_value = []

        with patch("src.shared.services.integration_service.PostRepository", return_value=repo):
            result = await service.submit_indexnow(now=NOW)

        assert result["submitted"] == 0
        indexing.submit_urls.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_indexnow_rejected(self, service, indexing):
        repo = AsyncMock()
        repo.list_published_since.return_value = [make_post(slug="a")]
        indexing.submit_urls.return_value = PingResult(ok=False, status_code=403, error="bad key")

        with patch("src.shared.services.integration_service.PostRepository", return_value=repo):
            with pytest.raises(ExternalServiceError) as exc:
                await service.submit_indexnow(now=NOW)

        assert exc.value.status_code == 502
        indexing.ping_websub.assert_not_awaited()
