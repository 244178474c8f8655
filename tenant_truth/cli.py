#!/usr/bin/env python3
"""
Tenant Truth CLI - rent status from a JSON export of tenant records.

Usage:
    tenant-truth stats tenants.json                    # Portfolio counters
    tenant-truth stats tenants.json --as-of 2024-02-15 # As of a given day
    tenant-truth list pending tenants.json             # Tenants in a bucket
    tenant-truth show tenants.json t-42                # One tenant's status
    tenant-truth stats tenants.json --json             # JSON output

The input file is a JSON array of tenant records, each joined with its
tenant_payments, advance_payments and refund_payments.
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from tenant_truth import config
from tenant_truth.contracts import (
    LoadResult,
    StatusResultModel,
    TenantStatisticsModel,
    TenantStatusRow,
    load_snapshots,
)
from tenant_truth.observability import BatchContext, configure_logging
from tenant_truth.rent_status import BulkClassifier, RentBucket, StatusCalculator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_BAD_INPUT = 2


def print_header(text: str):
    """Print a section header."""
    print(f"\n{'═' * 50}")
    print(f"  {text}")
    print(f"{'═' * 50}")


def print_table(headers: list, rows: list, widths: list = None):
    """Print a simple table."""
    if not widths:
        widths = [max(len(str(row[i])) for row in [headers] + rows) for i in range(len(headers))]

    header_str = " │ ".join(str(h).ljust(w) for h, w in zip(headers, widths))
    print(header_str)
    print("─" * len(header_str))

    for row in rows:
        print(" │ ".join(str(c)[:w].ljust(w) for c, w in zip(row, widths)))


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _load(path: Path, policy: config.RentPolicy) -> LoadResult:
    """Read the tenant export. Raises ValueError on unreadable input."""
    try:
        raw = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read {path}: {e}") from e
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON array of tenant records")

    loaded = load_snapshots(raw, policy.active_statuses)
    for rejected in loaded.rejected:
        print(
            f"  ✗ record #{rejected.index} ({rejected.tenant_id or '?'}) skipped: {rejected.reason}",
            file=sys.stderr,
        )
    return loaded


def cmd_stats(classifier: BulkClassifier, loaded: LoadResult, args) -> int:
    """Show portfolio statistics."""
    stats = classifier.aggregate_statistics(loaded.snapshots)
    model = TenantStatisticsModel.from_statistics(stats)

    if args.json:
        _print_json(model.model_dump(mode="json"))
        return EXIT_OK

    print_header(f"RENT STATUS — as of {classifier.as_of.isoformat()}")
    print_table(
        ["Metric", "Value"],
        [
            ["Tenants", model.total],
            ["Active", model.active],
            ["Pending rent", model.with_pending_rent],
            ["Partial rent", model.with_partial_rent],
            ["Paid rent", model.with_paid_rent],
            ["Without advance", model.without_advance],
            ["Total due", f"{model.total_due_amount:,.2f}"],
        ],
    )
    if loaded.rejected:
        print(f"\n{len(loaded.rejected)} record(s) skipped, see stderr.")
    return EXIT_OK


def cmd_list(classifier: BulkClassifier, loaded: LoadResult, args) -> int:
    """List active tenants in a bucket."""
    bucket = RentBucket(args.bucket)
    rows = [TenantStatusRow.from_enriched(e) for e in classifier.classify(loaded.snapshots, bucket)]

    if args.json:
        _print_json([r.model_dump(mode="json") for r in rows])
        return EXIT_OK

    print_header(f"{bucket.value.upper().replace('_', ' ')} — {len(rows)} tenant(s)")
    if not rows:
        print("No tenants in this bucket.")
        return EXIT_OK

    print_table(
        ["ID", "Name", "Status", "Partial due", "Pending due", "Total due"],
        [
            [
                r.tenant_id or "-",
                (r.name or "-")[:30],
                r.status_label or "-",
                f"{r.partial_due_amount:,.2f}",
                f"{r.pending_due_amount:,.2f}",
                f"{r.rent_due_amount:,.2f}",
            ]
            for r in rows
        ],
    )
    return EXIT_OK


def cmd_show(classifier: BulkClassifier, loaded: LoadResult, args) -> int:
    """Show one tenant's status."""
    matches = [s for s in loaded.snapshots if s.tenant_id == args.tenant_id]
    if not matches:
        print(f"Tenant {args.tenant_id} not found.", file=sys.stderr)
        return EXIT_NOT_FOUND

    snapshot = matches[0]
    status = classifier.status_for(snapshot)
    model = StatusResultModel.from_result(status)
    headline = status.headline

    if args.json:
        _print_json(
            {
                "tenant_id": snapshot.tenant_id,
                "rent_status": headline.value if headline else None,
                "status_label": status.headline_label,
                **model.model_dump(mode="json"),
            }
        )
        return EXIT_OK

    print_header(f"{snapshot.name or snapshot.tenant_id} — as of {classifier.as_of.isoformat()}")
    print(f"  Active:          {'yes' if snapshot.active else 'no'}")
    print(f"  Status:          {status.headline_label or '-'}")
    print(f"  Rent paid:       {'✓' if model.is_rent_paid else '✗'}")
    print(f"  Rent partial:    {'yes' if model.is_rent_partial else 'no'}")
    print(f"  Pending months:  {model.pending_months}")
    print(f"  Partial due:     {model.partial_due_amount:,.2f}")
    print(f"  Pending due:     {model.pending_due_amount:,.2f}")
    print(f"  Total due:       {model.rent_due_amount:,.2f}")
    print(f"  Advance paid:    {'✓' if model.is_advance_paid else '✗'}")
    print(f"  Refund paid:     {'✓' if model.is_refund_paid else '✗'}")
    return EXIT_OK


COMMANDS = {
    "stats": cmd_stats,
    "list": cmd_list,
    "show": cmd_show,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tenant-truth", description="Tenant rent status — who is paid, partial or pending?"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--as-of",
        type=date.fromisoformat,
        help="Reference day (YYYY-MM-DD). Defaults to today.",
    )
    common.add_argument("--json", "-j", action="store_true", help="Output JSON")

    sub = parser.add_subparsers(dest="command", required=True)

    p_stats = sub.add_parser("stats", parents=[common], help="Portfolio statistics")
    p_stats.add_argument("file", type=Path, help="JSON array of tenant records")

    p_list = sub.add_parser("list", parents=[common], help="Tenants in a bucket")
    p_list.add_argument("bucket", choices=[b.value for b in RentBucket])
    p_list.add_argument("file", type=Path, help="JSON array of tenant records")

    p_show = sub.add_parser("show", parents=[common], help="One tenant's status")
    p_show.add_argument("file", type=Path, help="JSON array of tenant records")
    p_show.add_argument("tenant_id", help="Tenant id (or s_no)")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(config.LOG_LEVEL, config.LOG_JSON)

    policy = config.load_policy()
    as_of = args.as_of or date.today()

    classifier = BulkClassifier(as_of=as_of, calculator=StatusCalculator(policy=policy))
    with BatchContext(as_of=classifier.as_of):
        logger.debug(f"Running {args.command} on {args.file}")
        try:
            loaded = _load(args.file, policy)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_BAD_INPUT
        return COMMANDS[args.command](classifier, loaded, args)


if __name__ == "__main__":
    sys.exit(main())
