"""Domain entities and display helpers."""

import pytest

from contactbook.application.display import contact_card_html, contact_card_text, escape_html
from contactbook.domain import Contact, ContactFields, Credential


@pytest.mark.parametrize(
    "kwargs",
    [
        {"id": "", "first_name": "Ann", "last_name": "Lee"},
        {"id": "1", "first_name": " ", "last_name": "Lee"},
        {"id": "1", "first_name": "Ann", "last_name": ""},
    ],
)
def test_contact_requires_id_and_names(kwargs) -> None:
    with pytest.raises(ValueError):
        Contact(**kwargs)


def test_credential_requires_token() -> None:
    with pytest.raises(ValueError, match="token"):
        Credential(token="")


def test_to_fields_fills_absent_optionals() -> None:
    contact = Contact(id="1", first_name="Ann", last_name="Lee", phone="555")

    assert contact.to_fields() == ContactFields(
        first_name="Ann", last_name="Lee", email="", phone="555", company="", notes=""
    )


def test_fields_payload_uses_wire_names() -> None:
    fields = ContactFields(first_name="Ann", last_name="Lee", notes="a\nb")

    assert fields.to_payload() == {
        "firstName": "Ann",
        "lastName": "Lee",
        "email": "",
        "phone": "",
        "company": "",
        "notes": "a\nb",
    }


def test_missing_required() -> None:
    assert ContactFields(first_name="Ann", last_name="Lee").missing_required() == ()
    assert ContactFields(last_name=" ").missing_required() == ("firstName", "lastName")


def test_escape_html() -> None:
    assert escape_html(None) == ""
    assert escape_html("") == ""
    assert escape_html('<b>"Ann" & Co</b>') == "&lt;b&gt;&quot;Ann&quot; &amp; Co&lt;/b&gt;"


def test_card_html_escapes_values_and_omits_absent_fields() -> None:
    contact = Contact(id="1", first_name="<script>", last_name="Lee", email="a@b.c")

    html = contact_card_html(contact)

    assert "&lt;script&gt;" in html
    assert "<script>" not in html
    assert 'href="mailto:a@b.c"' in html
    assert "tel:" not in html
    assert "contact-company" not in html
    assert "contact-notes" not in html


def test_card_text_lists_notes_lines() -> None:
    contact = Contact(id="9", first_name="Ann", last_name="Lee", company="Initech", notes="one\ntwo")

    assert contact_card_text(contact) == (
        "[9] Ann Lee\n  Company: Initech\n  | one\n  | two"
    )
