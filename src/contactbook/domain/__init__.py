"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import (
    Contact,
    ContactFields,
    Credential,
    UserProfile,
)

__all__ = ["Contact", "ContactFields", "Credential", "UserProfile"]
