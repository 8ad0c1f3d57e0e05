"""CLI for exporting Groove conversation contacts."""

import argparse
import sys
from pathlib import Path

from .models import EXPORT_FORMATS

BANNER = "=" * 40


def _error(msg: str):
    sys.stderr.write(f"\033[2K\rError: {msg}\n")
    sys.stderr.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export contacts from Groove conversations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("export"),
        help="Directory for the exported file (default: ./export)",
    )

    search = parser.add_mutually_exclusive_group()
    search.add_argument(
        "--body",
        metavar="TEXT",
        default=None,
        help="Search conversations containing TEXT in the body",
    )
    search.add_argument(
        "--tag",
        metavar="NAME",
        default=None,
        help="Search conversations tagged NAME",
    )

    parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default=None,
        help="Export format (prompted for when omitted)",
    )
    parser.add_argument(
        "--save-responses",
        type=Path,
        default=None,
        metavar="DIR",
        help="Save each raw API response to DIR/response_<page>.json",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    from .client import GrooveClient, get_settings
    from .export import ExportError, compute_stats, preview, write_export
    from .pager import fetch_contacts
    from .prompt import make_search_spec, prompt_export_format, prompt_search_spec
    from .settings import ConfigurationError

    print(BANNER)
    print("Groove API Email Fetcher")
    print(BANNER + "\n", flush=True)

    if not get_settings().auth_token:
        _error("AUTH_TOKEN is not set")
        return 1

    try:
        if args.body is not None:
            spec = make_search_spec("body", args.body)
        elif args.tag is not None:
            spec = make_search_spec("tag", args.tag)
        else:
            spec = prompt_search_spec()
        fmt = args.format or prompt_export_format()
        client = GrooveClient(save_dir=args.save_responses)
    except ConfigurationError as e:
        _error(str(e))
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nOperation cancelled by user.")
        return 0

    if spec.kind == "tag":
        print(f'Searching for emails tagged with: "{spec.tag_name}"')
    else:
        print(f'Searching for emails containing: "{spec.text}"')
    print(f"Results will be exported as {fmt.upper()}\n", flush=True)

    try:
        result = fetch_contacts(client, spec)
    finally:
        client.close()

    contacts = list(result.contacts)
    print(f"\n{BANNER}")
    print(f"Total contacts collected: {len(contacts)}")
    print(f"{BANNER}\n", flush=True)

    try:
        path = write_export(contacts, fmt, args.output_dir)
    except ExportError as e:
        _error(str(e))
        return 1

    print(f"Results saved to {path}\n")
    print("Preview (first 5 contacts):")
    print(preview(contacts, fmt))

    stats = compute_stats(contacts)
    print("\nStatistics:")
    print(f"Total contacts: {stats.total}")
    print(f"Unique emails: {stats.unique_emails}\n")

    if result.failed:
        _error(f"Run stopped early ({result.error}); exported partial results to {path}")
        return 1

    print(f"Done! Check {path} for the complete list.", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
