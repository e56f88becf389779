"""Tests for the YAML message catalog and NoticeBoard."""

import pytest

from contactbook.application import MessageCatalog, NoticeBoard
from contactbook.application.notices import DEFAULT_MESSAGES, ERROR, SUCCESS
from contactbook.infrastructure.messages import (
    REQUIRED_MESSAGES,
    get_messages_path,
    load_messages,
)


def test_load_bundled_catalog():
    path = get_messages_path()
    assert path.name == "messages.yaml"
    catalog = load_messages(path)
    for message_id in REQUIRED_MESSAGES:
        assert catalog.messages[message_id]
    assert catalog.error_dismiss_seconds == 5
    assert catalog.success_dismiss_seconds == 3


def test_bundled_catalog_matches_builtin_texts():
    catalog = load_messages()
    for message_id, text in DEFAULT_MESSAGES.items():
        assert catalog.messages[message_id] == text


def test_format_fills_placeholders():
    catalog = MessageCatalog()
    assert catalog.format("welcome", name="Ann") == "Welcome, Ann"
    assert catalog.format("welcome", name=None) == "Welcome, "
    assert catalog.format("no_such_message") == "no_such_message"


def test_catalog_missing_required_message(tmp_path):
    (tmp_path / "messages.yaml").write_text("messages:\n  welcome: Hi {name}\n")
    with pytest.raises(ValueError, match="missing: contact_created"):
        load_messages(tmp_path / "messages.yaml")


def test_catalog_must_be_mapping(tmp_path):
    (tmp_path / "messages.yaml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="must be a dict"):
        load_messages(tmp_path / "messages.yaml")


def test_notice_board_expiry_and_dismiss():
    now = [0.0]
    board = NoticeBoard(
        MessageCatalog(error_dismiss_seconds=5, success_dismiss_seconds=3),
        clock=lambda: now[0],
    )
    board.error("boom")
    board.success("done")
    assert [(n.level, n.text) for n in board.active()] == [(ERROR, "boom"), (SUCCESS, "done")]

    board.dismiss(ERROR)
    assert [n.text for n in board.active()] == ["done"]

    now[0] = 3.0
    assert board.active() == []
