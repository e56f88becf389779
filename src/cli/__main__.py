"""
Command-line front end: ContactsApp over HTTP with a saved credential.
Run: python -m cli <command> (from repo root, with .env or env vars set).
"""

import argparse
import asyncio
import getpass
import logging
import sys

from contactbook.application import VIEW_APP, ContactsApp
from contactbook.application.display import contact_card_html, contact_card_text
from contactbook.application.notices import ERROR
from contactbook.domain import ContactFields
from contactbook.infrastructure import HttpContactsApi, Settings, build_app, load_env

logger = logging.getLogger(__name__)

FIELD_OPTIONS = (
    ("first_name", "--first-name"),
    ("last_name", "--last-name"),
    ("email", "--email"),
    ("phone", "--phone"),
    ("company", "--company"),
    ("notes", "--notes"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contactbook", description="Manage your contacts.")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="sign in and remember the session")
    login.add_argument("email")
    login.add_argument("--password")

    register = sub.add_parser("register", help="create an account and sign in")
    register.add_argument("name")
    register.add_argument("email")
    register.add_argument("--password")

    sub.add_parser("logout", help="forget the saved session")
    sub.add_parser("whoami", help="show the signed-in user")

    list_cmd = sub.add_parser("list", help="list contacts (optionally filtered)")
    list_cmd.add_argument("query", nargs="?", default="")
    list_cmd.add_argument("--html", action="store_true", help="print HTML cards")

    add = sub.add_parser("add", help="create a contact")
    edit = sub.add_parser("edit", help="update a contact; omitted fields keep their value")
    edit.add_argument("contact_id")
    for name, flag in FIELD_OPTIONS:
        add.add_argument(flag, dest=name, default=None)
        edit.add_argument(flag, dest=name, default=None)

    delete = sub.add_parser("delete", help="delete a contact")
    delete.add_argument("contact_id")
    delete.add_argument("-y", "--yes", action="store_true", help="do not ask for confirmation")
    return parser


def _fields_from_args(args: argparse.Namespace, base: ContactFields | None = None) -> ContactFields:
    values = {}
    for name, _ in FIELD_OPTIONS:
        given = getattr(args, name, None)
        if given is not None:
            values[name] = given
        elif base is not None:
            values[name] = getattr(base, name)
    return ContactFields(**values)


def _has_errors(app: ContactsApp) -> bool:
    return any(n.level == ERROR for n in app.notices.active())


def _print_notices(app: ContactsApp) -> None:
    for notice in app.notices.active():
        stream = sys.stderr if notice.level == ERROR else sys.stdout
        print(notice.text, file=stream)


async def run(args: argparse.Namespace, app: ContactsApp) -> int:
    command = args.command

    if command == "login":
        password = args.password or getpass.getpass("Password: ")
        ok = await app.login(args.email, password)
        if ok:
            print(app.greeting)
        return 0 if ok else 1
    if command == "register":
        password = args.password or getpass.getpass("Password: ")
        ok = await app.register(args.name, args.email, password)
        if ok:
            print(app.greeting)
        return 0 if ok else 1

    if command == "logout":
        app.logout()
        print(app.catalog.format("logged_out"))
        return 0

    view = await app.start()
    if view != VIEW_APP:
        print("Not signed in. Run: contactbook login <email>", file=sys.stderr)
        return 1
    if command == "whoami":
        print(app.greeting)
        return 0
    if command == "list":
        contacts = app.visible_contacts(args.query)
        print(f"{app.greeting} ({len(contacts)})")
        if not contacts:
            print(app.catalog.format("empty_list"))
        render = contact_card_html if args.html else contact_card_text
        for contact in contacts:
            print(render(contact))
        return 1 if _has_errors(app) else 0
    if command == "add":
        app.session.begin_create()
        ok = await app.submit_contact(_fields_from_args(args))
        return 0 if ok else 1
    if command == "edit":
        current = app.edit_contact(args.contact_id)
        if current is None:
            return 1
        ok = await app.submit_contact(_fields_from_args(args, base=current))
        return 0 if ok else 1
    if command == "delete":
        prompt = app.catalog.format("confirm_delete")

        def confirm() -> bool:
            if args.yes:
                return True
            return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")

        ok = await app.delete_contact(args.contact_id, confirm)
        return 0 if ok else 1
    raise SystemExit(f"Unknown command: {command}")


async def _main(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    logger.debug("Running %s against %s", args.command, settings.api_url)
    async with HttpContactsApi(settings.api_url, timeout_seconds=settings.timeout_seconds) as api:
        app = build_app(settings, api=api)
        try:
            return await run(args, app)
        finally:
            _print_notices(app)


def main(argv: list[str] | None = None) -> int:
    load_env()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
