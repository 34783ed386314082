"""
Unit Tests for Note Service.

Tests the NoteService business logic with mocked repositories.
"""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, call, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from notebook.core.colors import color_for
from notebook.core.exceptions import DatabaseError, ValidationError
from notebook.services.note import NoteService, normalize_author


@pytest.fixture
def service(mock_db_session):
    """NoteService whose repositories are mocked."""
    svc = NoteService(mock_db_session)
    svc.notes = AsyncMock()
    svc.tags = AsyncMock()
    svc.links = AsyncMock()
    svc.notes.create.return_value = SimpleNamespace(id=7)
    svc.notes.update_content.return_value = True
    svc.tags.get_id_by_name.side_effect = lambda name: {"groceries": 1, "today": 2}.get(name, 99)
    return svc


class TestNormalizeAuthor:
    """Tests for author normalization."""

    @pytest.mark.parametrize("author", [None, "", "   "])
    def test_blank_becomes_empty(self, author):
        assert normalize_author(author) == ""

    def test_keeps_author(self):
        assert normalize_author("ana") == "ana"


class TestNoteServiceCreate:
    """Tests for note creation."""

    @pytest.mark.asyncio
    async def test_create_note_success(self, service, mock_db_session):
        result = await service.create_note("Buy milk #groceries #today", "ana")

        service.notes.create.assert_awaited_once_with(
            title="Buy milk",
            content="Buy milk #groceries #today",
            author="ana",
        )
        service.tags.ensure.assert_has_awaits([
            call("groceries", color=color_for("groceries")),
            call("today", color=color_for("today")),
        ])
        service.links.link.assert_has_awaits([
            call(7, 1, "ana"),
            call(7, 2, "ana"),
        ])
        mock_db_session.commit.assert_awaited_once()
        assert result.id == 7
        assert result.title == "Buy milk"
        assert result.tags == ["groceries", "today"]

    @pytest.mark.asyncio
    async def test_create_without_hashtags_links_nothing(self, service):
        result = await service.create_note("plain text", None)

        service.tags.ensure.assert_not_awaited()
        service.links.link.assert_not_awaited()
        assert service.notes.create.await_args.kwargs["author"] == ""
        assert result.tags == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   "])
    async def test_blank_content_is_rejected(self, service, mock_db_session, content):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_note(content, "ana")

        assert exc_info.value.message == "Content is required"
        service.notes.create.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_while_linking_rolls_back(self, service, mock_db_session):
        service.links.link.side_effect = OperationalError("INSERT", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await service.create_note("text #groceries", "ana")

        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unique_violation_is_database_error(self, service, mock_db_session):
        service.links.link.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: note_tags.note_id, note_tags.tag_id")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await service.update_note(3, "Racing edit #today", "ana")

        assert exc_info.value.code == "SYS_DATABASE_ERROR"
        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()


class TestNoteServiceUpdate:
    """Tests for note updates."""

    @pytest.mark.asyncio
    async def test_update_replaces_tags(self, service, mock_db_session):
        result = await service.update_note(3, "New title #today", "ana")

        service.notes.update_content.assert_awaited_once_with(
            3, title="New title", content="New title #today"
        )
        service.links.unlink_all.assert_awaited_once_with(3)
        service.links.link.assert_awaited_once_with(3, 2, "ana")
        mock_db_session.commit.assert_awaited_once()
        assert result.id == 3
        assert result.tags == ["today"]

    @pytest.mark.asyncio
    async def test_missing_note_is_a_no_op(self, service, mock_db_session):
        service.notes.update_content.return_value = False

        result = await service.update_note(404, "Ghost #today", "ana")

        service.links.unlink_all.assert_not_awaited()
        service.links.link.assert_not_awaited()
        assert result.id == 404
        assert result.title == "Ghost"

    @pytest.mark.asyncio
    async def test_blank_content_is_rejected(self, service):
        with pytest.raises(ValidationError):
            await service.update_note(3, " ", "ana")

        service.notes.update_content.assert_not_awaited()


class TestNoteServiceDelete:
    """Tests for soft deletion."""

    @pytest.mark.asyncio
    async def test_marks_blocked_and_commits(self, service, mock_db_session):
        await service.delete_note(5)

        service.notes.mark_blocked.assert_awaited_once_with(5)
        mock_db_session.commit.assert_awaited_once()


class TestNoteServiceList:
    """Tests for listing notes and tags."""

    @pytest.mark.asyncio
    async def test_tag_filter_is_lowercased(self, service):
        service.notes.list_for_author.return_value = []

        await service.list_notes("ana", tag="Groceries", search="milk")

        service.notes.list_for_author.assert_awaited_once_with(
            "ana", tag="groceries", search="milk"
        )

    @pytest.mark.asyncio
    async def test_notes_carry_tag_names(self, service):
        now = datetime(2024, 1, 1)
        note = SimpleNamespace(
            id=1,
            title="Buy milk",
            content="Buy milk #groceries",
            is_favorite=False,
            is_archived=False,
            is_processed=False,
            blocked="false",
            author="ana",
            shared_with=None,
            created_at=now,
            updated_at=now,
            tags=[SimpleNamespace(name="groceries"), SimpleNamespace(name="today")],
        )
        service.notes.list_for_author.return_value = [note]

        result = await service.list_notes("ana")

        assert result[0].tags == ["groceries", "today"]

    @pytest.mark.asyncio
    async def test_list_tags_counts(self, service):
        now = datetime(2024, 1, 1)
        tag = SimpleNamespace(id=1, name="groceries", color="#5737D7", created_at=now)
        service.tags.list_for_author.return_value = [(tag, 3)]

        result = await service.list_tags("ana")

        assert result[0].name == "groceries"
        assert result[0].note_count == 3

    @pytest.mark.asyncio
    async def test_read_failure_is_database_error(self, service):
        service.notes.list_for_author.side_effect = OperationalError(
            "SELECT", {}, Exception("gone")
        )

        with pytest.raises(DatabaseError):
            await service.list_notes("ana")


class TestBaseServiceLogging:
    """Tests for operation logging."""

    @pytest.mark.asyncio
    async def test_create_is_logged(self, service, mock_logger):
        with patch.object(service, "_logger", mock_logger):
            await service.create_note("text #today", "ana")

        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.args[0] == "Creating note"
        assert mock_logger.info.call_args.kwargs["extra"]["tags"] == ["today"]


def test_service_builds_repositories(mock_db_session):
    service = NoteService(mock_db_session)

    assert service.notes.session is mock_db_session
    assert service.tags.session is mock_db_session
    assert service.links.session is mock_db_session
    assert service.session is mock_db_session
