#!/usr/bin/env python3
"""
check_passwords.py — breached-password checker (k-anonymity range API)

Features
- SHA-1 hashing done locally; only the 5-char hash prefix leaves the machine
- Padded responses by default (Add-Padding: true)
- Per-run prefix cache and a polite delay between distinct-prefix requests
- Passwords from arguments, a text file, a CSV with a header, or a hidden prompt
- Clear CLI output or JSON

Environment (.env)
  PWNED_BASE_URL=...
  PWNED_USER_AGENT=...
  PWNED_THROTTLE_MS=1600
  PWNED_DISABLE_PADDING=false
  PWNED_INCLUDE_PLAINTEXT=false
  PWNED_TIMEOUT=10

Usage
  python check_passwords.py PASSWORD [PASSWORD ...]
  python check_passwords.py --file passwords.txt
  python check_passwords.py --csv export.csv [--column password]
  python check_passwords.py --prompt
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from typing import List, Optional, Tuple

import click

from pwned.config import Settings, load_config
from pwned.engine import CheckEngine
from pwned.errors import CheckCancelled, NetworkError, ValidationError
from pwned.models import MAX_THROTTLE_MS, CandidateEntry, VerdictRecord
from pwned.range_client import RangeClient
from pwned.sources import (
    entries_from_args,
    entries_from_csv,
    entries_from_file,
    wiped_secret,
)

EXIT_CLEAN = 0
EXIT_PWNED = 1
EXIT_USAGE = 2
EXIT_NETWORK = 3
EXIT_CANCELLED = 130

# --------------------------
# Running
# --------------------------


def run_checks(
    settings: Settings,
    entries: List[CandidateEntry],
    show_progress: bool,
    client: Optional[RangeClient] = None,
) -> List[VerdictRecord]:
    """Run the engine on a worker thread so Ctrl-C can cancel between entries."""
    client = client or RangeClient(
        base_url=settings.base_url,
        user_agent=settings.user_agent,
        timeout=settings.timeout,
    )
    engine = CheckEngine(client, settings.check)
    cancel = threading.Event()
    outcome: dict = {}

    def progress(index: int, total: int) -> None:
        click.echo(f"\r🔎 {index}/{total}", err=True, nl=index == total)

    def worker() -> None:
        try:
            outcome["verdicts"] = engine.check_all(
                entries, progress=progress if show_progress else None, cancel=cancel
            )
        except Exception as e:  # handed back to the calling thread
            outcome["error"] = e

    t = threading.Thread(target=worker, name="pwned-check", daemon=True)
    t.start()
    try:
        while t.is_alive():
            t.join(0.2)
    except KeyboardInterrupt:
        cancel.set()
        t.join()
    finally:
        client.close()

    if "error" in outcome:
        raise outcome["error"]
    return outcome["verdicts"]


# --------------------------
# Output
# --------------------------


def print_verdicts(verdicts: List[VerdictRecord]) -> None:
    print("\n============ Pwned Password Check ============")
    for v in verdicts:
        label = v.plain_text if v.plain_text is not None else v.password_preview
        icon = "🚫" if v.is_pwned else "✅"
        print(f"{icon} {label}")
        if v.is_pwned:
            print(f"   Seen:            {v.pwned_count:,} time(s) in breaches")
        else:
            print("   Seen:            not found")
        for caption, value in (
            ("Site", v.site_name),
            ("URL", v.site_url),
            ("Username", v.username),
            ("Note", v.note),
        ):
            if value:
                print(f"   {caption + ':':17s}{value}")

    pwned = sum(1 for v in verdicts if v.is_pwned)
    print("\n==============================================")
    print(f"💡 Checked {len(verdicts)} password(s), {pwned} found in breaches.")
    print("==============================================\n")


# --------------------------
# CLI
# --------------------------


def collect_entries(
    passwords: Tuple[str, ...], file: Optional[str], csv_path: Optional[str], column: str
) -> List[CandidateEntry]:
    entries = entries_from_args(passwords)
    if file:
        entries.extend(entries_from_file(file))
    if csv_path:
        entries.extend(entries_from_csv(csv_path, column=column))
    return entries


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("passwords", nargs=-1)
@click.option(
    "--file",
    "file",
    type=click.Path(exists=True, dir_okay=False),
    help="Text file, one password per line.",
)
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(exists=True, dir_okay=False),
    help="CSV file with a header row.",
)
@click.option(
    "--column", default="password", show_default=True, help="Password column for --csv."
)
@click.option("--prompt", is_flag=True, help="Read a single password from a hidden prompt.")
@click.option(
    "--no-padding", is_flag=True, help="Do not ask the service for padded responses."
)
@click.option(
    "--throttle",
    type=click.IntRange(0, MAX_THROTTLE_MS),
    default=None,
    help="Delay in ms between distinct-prefix requests (default 1600).",
)
@click.option("--show-plaintext", is_flag=True, help="Echo passwords in the results.")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def main(
    passwords: Tuple[str, ...],
    file: Optional[str],
    csv_path: Optional[str],
    column: str,
    prompt: bool,
    no_padding: bool,
    throttle: Optional[int],
    show_plaintext: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_config(
            include_plain_text=True if show_plaintext else None,
            disable_padding=True if no_padding else None,
            throttle_ms=throttle,
        )
    except ValueError as e:
        click.echo(f"\n❌ Error: {e}", err=True)
        sys.exit(EXIT_USAGE)

    if prompt and (passwords or file or csv_path):
        click.echo(
            "\n❌ Error: --prompt cannot be combined with other password input", err=True
        )
        sys.exit(EXIT_USAGE)

    try:
        if prompt:
            with wiped_secret(lambda: click.prompt("Password", hide_input=True)) as secret:
                entries = [CandidateEntry(secret.decode("utf-8", "surrogatepass"))]
                verdicts = run_checks(settings, entries, show_progress=False)
        else:
            entries = collect_entries(passwords, file, csv_path, column)
            verdicts = run_checks(settings, entries, show_progress=len(entries) > 1)
    except (ValidationError, ValueError) as e:
        click.echo(f"\n❌ Error: {e}", err=True)
        sys.exit(EXIT_USAGE)
    except NetworkError as e:
        click.echo(f"\n❌ Network error: {e}", err=True)
        sys.exit(EXIT_NETWORK)
    except CheckCancelled as e:
        click.echo(f"\n⚠️ Cancelled: {e}", err=True)
        sys.exit(EXIT_CANCELLED)

    if as_json:
        click.echo(json.dumps([v.to_dict() for v in verdicts], indent=2))
    else:
        print_verdicts(verdicts)

    sys.exit(EXIT_PWNED if any(v.is_pwned for v in verdicts) else EXIT_CLEAN)


if __name__ == "__main__":
    main()
