"""Contact card rendering for HTML and plain-text front ends."""

import html

from contactbook.domain import Contact


def escape_html(text: str | None) -> str:
    if not text:
        return ""
    return html.escape(text, quote=True)


def contact_card_html(contact: Contact) -> str:
    """One contact as an HTML card. Every user value is escaped; absent fields are omitted."""
    cid = escape_html(contact.id)
    parts = [
        f'<div class="contact-card" data-id="{cid}">',
        '<div class="contact-card-header"><div>',
        f'<div class="contact-name">{escape_html(contact.first_name)} '
        f"{escape_html(contact.last_name)}</div>",
    ]
    if contact.company:
        parts.append(f'<div class="contact-company">{escape_html(contact.company)}</div>')
    parts.append("</div></div>")
    parts.append('<div class="contact-details">')
    if contact.email:
        email = escape_html(contact.email)
        parts.append(f'<div class="contact-detail"><a href="mailto:{email}">{email}</a></div>')
    if contact.phone:
        phone = escape_html(contact.phone)
        parts.append(f'<div class="contact-detail"><a href="tel:{phone}">{phone}</a></div>')
    parts.append("</div>")
    if contact.notes:
        parts.append(f'<div class="contact-notes">{escape_html(contact.notes)}</div>')
    parts.append("</div>")
    return "".join(parts)


def contact_card_text(contact: Contact) -> str:
    """Format one contact as card (name, company, email, phone) + notes."""
    lines = [f"[{contact.id}] {contact.full_name}"]
    if contact.company:
        lines.append(f"  Company: {contact.company}")
    if contact.email:
        lines.append(f"  Email: {contact.email}")
    if contact.phone:
        lines.append(f"  Phone: {contact.phone}")
    if contact.notes:
        for note_line in contact.notes.splitlines():
            lines.append(f"  | {note_line}")
    return "\n".join(lines)
