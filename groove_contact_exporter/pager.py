"""Cursor pagination over Groove conversations, folding pages into contacts.

Each step takes the current RunAccumulator and returns the next one:

    FETCHING -> ACCUMULATING -> CONTINUING -> FETCHING ... -> DONE
         \\-> FAILED

DONE and FAILED are terminal. A failure keeps every contact gathered from
earlier pages; the failing page contributes nothing.
"""

import sys
import time
from dataclasses import dataclass, replace
from enum import Enum

from .client import ApiError, TransportError
from .models import PAGE_SIZE, REQUEST_DELAY, Contact, PageResult, SearchSpec, total_pages
from .queries import build_request


class State(Enum):
    FETCHING = "fetching"
    ACCUMULATING = "accumulating"
    CONTINUING = "continuing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class RunAccumulator:
    """State of one export run, replaced (never mutated) at each step."""

    contacts: tuple[Contact, ...] = ()
    page: int = 1
    cursor: str | None = None
    total_count: int | None = None
    state: State = State.FETCHING
    error: str | None = None

    @property
    def finished(self) -> bool:
        return self.state in (State.DONE, State.FAILED)

    @property
    def failed(self) -> bool:
        return self.state is State.FAILED


def _progress(msg: str):
    sys.stdout.write(f"\033[2K\r{msg}")
    sys.stdout.flush()


def _log(msg: str):
    sys.stderr.write(f"\033[2K\r[pager] {msg}\n")
    sys.stderr.flush()


def parse_page(body: dict) -> PageResult:
    """Parse a response body into a PageResult.

    Nodes without a contact object are skipped; missing contact fields
    become None.
    """
    conversations = (body.get("data") or {}).get("conversations")
    if not isinstance(conversations, dict):
        raise TransportError("Unexpected response structure")

    contacts = []
    for node in conversations.get("nodes") or []:
        contact = (node or {}).get("contact")
        if contact:
            contacts.append(Contact.from_api(contact))

    page_info = conversations.get("pageInfo")
    if not isinstance(page_info, dict) or not isinstance(page_info.get("hasNextPage"), bool):
        raise TransportError("Unexpected response structure: missing pageInfo.hasNextPage")
    has_next_page = page_info["hasNextPage"]
    end_cursor = page_info.get("endCursor")
    if has_next_page and end_cursor is None:
        raise TransportError("hasNextPage is set but endCursor is missing")

    return PageResult(
        contacts=contacts,
        has_next_page=has_next_page,
        end_cursor=end_cursor,
        total_count=conversations.get("totalCount") or 0,
    )


def fetch(client, spec: SearchSpec, acc: RunAccumulator) -> tuple[RunAccumulator, PageResult | None]:
    """FETCHING: request the page at acc.cursor.

    Returns (acc in ACCUMULATING, page) on success and (acc in FAILED, None)
    on a transport or API error.
    """
    try:
        body = client.send(build_request(spec, acc.cursor), page=acc.page)
        page = parse_page(body)
    except (TransportError, ApiError) as exc:
        _log(f"Error on page {acc.page}: {exc}")
        return replace(acc, state=State.FAILED, error=f"page {acc.page}: {exc}"), None
    return replace(acc, state=State.ACCUMULATING), page


def accumulate(acc: RunAccumulator, page: PageResult) -> RunAccumulator:
    """ACCUMULATING: append the page's contacts in server order."""
    total_count = acc.total_count
    if total_count is None:
        total_count = page.total_count
        print(f"Total emails to fetch: {total_count}", flush=True)
        print(f"Total pages: {total_pages(total_count)}\n", flush=True)
    return replace(
        acc,
        contacts=acc.contacts + tuple(page.contacts),
        total_count=total_count,
        state=State.CONTINUING,
    )


def advance(acc: RunAccumulator, page: PageResult) -> RunAccumulator:
    """CONTINUING: move to the next cursor, or finish on the last page."""
    if not page.has_next_page:
        return replace(acc, state=State.DONE)
    return replace(acc, cursor=page.end_cursor, page=acc.page + 1, state=State.FETCHING)


def step(client, spec: SearchSpec, acc: RunAccumulator) -> RunAccumulator:
    """Run one page through FETCHING, ACCUMULATING and CONTINUING."""
    acc, page = fetch(client, spec, acc)
    if page is None:
        return acc
    acc = accumulate(acc, page)
    return advance(acc, page)


def fetch_contacts(client, spec: SearchSpec, delay: float = REQUEST_DELAY) -> RunAccumulator:
    """Page through every conversation matching `spec`.

    Always returns the final accumulator, in DONE or FAILED state. A
    KeyboardInterrupt ends the run as FAILED so the caller can still export
    what was gathered.
    """
    acc = RunAccumulator()
    print("Starting to fetch emails...\n", flush=True)

    try:
        while not acc.finished:
            acc = step(client, spec, acc)
            if acc.total_count is not None:
                pages = total_pages(acc.total_count, PAGE_SIZE)
                done_pages = acc.page if acc.state is State.DONE else acc.page - 1
                _progress(f"  Page {done_pages}/{pages} | Contacts: {len(acc.contacts)}")
            if acc.state is State.FETCHING:
                time.sleep(delay)
    except KeyboardInterrupt:
        acc = replace(acc, state=State.FAILED, error=f"interrupted on page {acc.page}")
        _log(f"Interrupted on page {acc.page}")

    sys.stdout.write("\n")
    sys.stdout.flush()
    if acc.state is State.DONE:
        print("All emails fetched!", flush=True)
    elif acc.contacts:
        print(f"Saving {len(acc.contacts)} contacts that were fetched before the error...", flush=True)
    return acc
