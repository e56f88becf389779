"""Errors raised by contacts API adapters."""

GENERIC_ERROR_MESSAGE = "Something went wrong"


class ServiceError(Exception):
    """Non-2xx response or transport failure from the remote contacts service.

    message is the service's `error` field when it sent one, so callers can
    show it to the user verbatim.
    """

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = (message or "").strip() or GENERIC_ERROR_MESSAGE
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404
