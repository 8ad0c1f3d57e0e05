"""Data models and constants for contact export."""

import math
from dataclasses import dataclass, field

PAGE_SIZE = 50  # Conversations per GraphQL page
REQUEST_DELAY = 0.5  # Seconds between page requests, keeps us clear of rate limiting

EXPORT_FORMATS = ("json", "csv")
EXPORT_FILENAMES = {
    "json": "exported_contacts.json",
    "csv": "exported_contacts.csv",
}
CONTACT_FIELDS = ("firstName", "lastName", "email")


@dataclass(frozen=True)
class Contact:
    """Contact projection of a conversation: the three exported fields."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None

    @classmethod
    def from_api(cls, contact: dict) -> "Contact":
        return cls(
            first_name=contact.get("firstName"),
            last_name=contact.get("lastName"),
            email=contact.get("email"),
        )

    def to_dict(self) -> dict:
        """Keys in export order: firstName, lastName, email."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }


@dataclass(frozen=True)
class BodySearch:
    """Conversations whose body contains `text`."""

    text: str
    kind: str = field(default="body", init=False)


@dataclass(frozen=True)
class TagSearch:
    """Conversations tagged with `tag_name`."""

    tag_name: str
    kind: str = field(default="tag", init=False)


SearchSpec = BodySearch | TagSearch


@dataclass
class PageResult:
    """One parsed page of the conversations connection."""

    contacts: list[Contact]
    has_next_page: bool
    end_cursor: str | None
    total_count: int


def total_pages(total_count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(total_count / page_size)
