"""Result objects returned by the application layer.

Failures the user should see are returned, not raised, so a presentation
layer can match on the type and render the message.
"""

from dataclasses import dataclass

from contactbook.domain import Contact, Credential


@dataclass(frozen=True)
class Refreshed:
    """A list fetch completed. applied is False when its outcome was dropped
    because a newer refresh had already won or the store was cleared.
    """

    count: int
    applied: bool = True


@dataclass(frozen=True)
class FetchFailed:
    """The list fetch failed; the previous snapshot is still served."""

    message: str


@dataclass(frozen=True)
class TargetNotFound:
    contact_id: str


@dataclass(frozen=True)
class ValidationFailed:
    reason: str
    missing: tuple[str, ...] = ()


@dataclass(frozen=True)
class SubmitSucceeded:
    action: str  # "created" or "updated"
    contact: Contact | None
    refresh: Refreshed | FetchFailed


@dataclass(frozen=True)
class SubmitFailed:
    message: str


@dataclass(frozen=True)
class Deleted:
    contact_id: str
    refresh: Refreshed | FetchFailed


@dataclass(frozen=True)
class DeleteCancelled:
    contact_id: str


@dataclass(frozen=True)
class DeleteFailed:
    contact_id: str
    message: str


@dataclass(frozen=True)
class AuthFailed:
    message: str


RefreshResult = Refreshed | FetchFailed
SubmitResult = SubmitSucceeded | SubmitFailed | ValidationFailed
DeleteResult = Deleted | DeleteCancelled | DeleteFailed | TargetNotFound
AuthResult = Credential | AuthFailed
