"""Interactive prompts for whatever the command line left out."""

from .models import BodySearch, SearchSpec, TagSearch
from .settings import ConfigurationError

SEARCH_CHOICES = [
    ("body", "Emails with text in the body"),
    ("tag", "Emails tagged with a specific tag"),
]
FORMAT_CHOICES = [
    ("json", "JSON"),
    ("csv", "CSV"),
]


def _choose(title: str, choices: list[tuple[str, str]], ask=None) -> str:
    """Numbered menu; re-asks until a listed number or value is entered."""
    ask = ask or input
    print(title, flush=True)
    for i, (_value, label) in enumerate(choices, start=1):
        print(f"  {i}) {label}", flush=True)
    values = [value for value, _label in choices]
    while True:
        answer = ask("> ").strip().lower()
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return values[int(answer) - 1]
        if answer in values:
            return answer
        print(f"Please enter a number between 1 and {len(choices)}.", flush=True)


def make_search_spec(kind: str, term: str) -> SearchSpec:
    """Build a SearchSpec, rejecting an empty search term."""
    if not term or not term.strip():
        if kind == "tag":
            raise ConfigurationError("Tag name cannot be empty.")
        raise ConfigurationError("Search query cannot be empty.")
    if kind == "tag":
        return TagSearch(term)
    return BodySearch(term)


def prompt_search_spec(ask=None) -> SearchSpec:
    ask = ask or input
    kind = _choose("What do you want to search for?", SEARCH_CHOICES, ask=ask)
    if kind == "tag":
        term = ask("Enter the tag name: ")
    else:
        term = ask("Enter your search query: ")
    return make_search_spec(kind, term)


def prompt_export_format(ask=None) -> str:
    return _choose("How would you like to export the results?", FORMAT_CHOICES, ask=ask)
