"""Serialize collected contacts to JSON or CSV."""

import csv
import io
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .models import CONTACT_FIELDS, EXPORT_FILENAMES, EXPORT_FORMATS, Contact

PREVIEW_COUNT = 5


class ExportError(Exception):
    """The export file could not be written."""


@dataclass
class ExportStats:
    total: int
    unique_emails: int


def to_json(contacts: Iterable[Contact]) -> str:
    return json.dumps([c.to_dict() for c in contacts], indent=2, ensure_ascii=False)


def to_csv(contacts: Iterable[Contact]) -> str:
    """CSV with a firstName,lastName,email header; None renders as empty.

    Rows holding a bare "\\r" are written fully quoted so readers keep it
    inside the field.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    quoted = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_ALL)
    writer.writerow(CONTACT_FIELDS)
    for c in contacts:
        row = [c.first_name, c.last_name, c.email]
        if any(value and "\r" in value for value in row):
            quoted.writerow(["" if value is None else value for value in row])
        else:
            writer.writerow(row)
    return buf.getvalue()


def serialize(contacts: Iterable[Contact], fmt: str) -> str:
    if fmt == "json":
        return to_json(contacts)
    if fmt == "csv":
        return to_csv(contacts)
    raise ValueError(f"Unknown export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")


def export_path(export_dir: Path, fmt: str) -> Path:
    return Path(export_dir) / EXPORT_FILENAMES[fmt]


def write_export(contacts: list[Contact], fmt: str, export_dir: Path) -> Path:
    """Write contacts to export_dir, overwriting any previous export.

    Returns the path written. Raises ExportError if the directory or file
    is not writable.
    """
    path = export_path(export_dir, fmt)
    content = serialize(contacts, fmt)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Cannot write {path}: {exc}") from exc
    return path


def compute_stats(contacts: list[Contact]) -> ExportStats:
    """Total count plus distinct non-null emails (case-sensitive)."""
    emails = {c.email for c in contacts if c.email is not None}
    return ExportStats(total=len(contacts), unique_emails=len(emails))


def preview(contacts: list[Contact], fmt: str, count: int = PREVIEW_COUNT) -> str:
    """First `count` contacts in the export format (CSV includes the header)."""
    return serialize(contacts[:count], fmt).rstrip("\n")
