"""Export contacts from Groove conversations.

Pages through the Groove GraphQL conversations API for a body-text or tag
search and writes the contact of every conversation to JSON or CSV.
"""

from .cli import main
from .models import BodySearch, Contact, TagSearch
from .pager import fetch_contacts

__all__ = ["main", "fetch_contacts", "BodySearch", "Contact", "TagSearch"]
