"""Listing breakdown CLI.

Provides commands for:
- categories: Show configured breakdown categories
- check: Validate the breakdowns of a listing record
- distribute: Auto-distribute breakdowns of a listing record to 100%
- report: Batch-check one breakdown category from a CSV table
"""
from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List

import pandas as pd
import yaml

from breakdown.category import BreakdownConfigError
from common.config_loader import load_all, load_yaml, save_yaml
from engine.form_engine import BreakdownForm
from policy.breakdown_policy import BreakdownPolicy
from policy.listing_rules import validate_breakdowns
from reporting.table import breakdown_report, distribute_frame

_log = logging.getLogger(__name__)


def load_policy(args) -> BreakdownPolicy:
    """Load the breakdown policy from the --config file."""
    cfg = load_all(args.config)
    return BreakdownPolicy(cfg.policy)


def load_record(path: str) -> Dict[str, Any]:
    record = load_yaml(path)
    if not isinstance(record, dict):
        raise ValueError(f"{path} does not contain a listing mapping")
    return record


def format_pct(value: Any) -> str:
    if value is None:
        return "unset"
    return f"{float(value):g}%"


def cmd_categories(args) -> int:
    """Handle categories command: list breakdown categories."""
    policy = load_policy(args)

    print("Breakdown Categories")
    print("=" * 50)
    for cat in policy.categories.values():
        print(f"\n{cat.key}: {cat.label}")
        print(f"  path: {cat.path}")
        for slot in cat.slots:
            print(f"    - {slot}")
    return 0


def cmd_check(args) -> int:
    """Handle check command: validate breakdowns of a listing."""
    policy = load_policy(args)
    categories = policy.select(args.category)
    record = load_record(args.listing)

    issues = validate_breakdowns(record, categories)

    print(f"Breakdown Check: {record.get('id', args.listing)}")
    print("=" * 50)
    if issues:
        print("\nIssues:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print("\nAll breakdowns add up to 100% (or are not yet complete).")
    return 0


def cmd_distribute(args) -> int:
    """Handle distribute command: auto-distribute breakdowns to 100%."""
    policy = load_policy(args)
    categories = policy.select(args.category)
    record = load_record(args.listing)

    form = BreakdownForm(categories, default=policy.default_value)
    form.load(record)

    print(f"Auto-distribute: {record.get('id', args.listing)}")
    print("=" * 50)

    changed = False
    for cat in categories:
        msg = form.auto_distribute(cat.key)
        print(f"\n{cat.label}:")
        for slot, value in form.values(cat.key).items():
            print(f"  {slot:28} {format_pct(value):>8}")
        print(f"  {'Total':28} {format_pct(form.sets[cat.key].total()):>8}")
        if msg:
            changed = True
            print(f"  {msg}")
        else:
            print("  Already totals 100%, nothing to adjust.")
        if form.error(cat.key):
            print(f"  Warning: {form.error(cat.key)}")

    if args.write and changed:
        save_yaml(args.listing, form.dump(record))
        print(f"\nUpdated listing saved to {args.listing}")

    return 0


def cmd_report(args) -> int:
    """Handle report command: batch breakdown report from CSV."""
    policy = load_policy(args)
    (cat,) = policy.select([args.category])

    df = pd.read_csv(args.csv)
    if args.distribute:
        df = distribute_frame(df, cat)
    report = breakdown_report(df, cat)

    print(f"Breakdown Report: {cat.label}")
    print("=" * 60)
    print(report.to_string(index=False))

    invalid = int((~report["valid"]).sum())
    incomplete = int((~report["complete"]).sum())
    print(f"\n  Listings:   {len(report)}")
    print(f"  Invalid:    {invalid}")
    print(f"  Incomplete: {incomplete}")

    if args.output:
        df.to_csv(args.output, index=False)
        print(f"\nDistributed values saved to {args.output}")

    return 1 if invalid else 0


def run(args) -> int:
    try:
        return args.func(args)
    except (BreakdownConfigError, KeyError, ValueError, OSError, yaml.YAMLError) as e:
        _log.debug("command %s failed", args.cmd, exc_info=True)
        # KeyError quotes its message when formatted
        msg = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"Error: {msg}")
        return 1


def main(argv: List[str] | None = None):
    """Main entry point."""
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Listing breakdown CLI: validate and auto-distribute percentage breakdowns",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments for all commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default="config/breakdown_policy.yaml", help="Breakdown policy file")
    common.add_argument("--verbose", action="store_true", help="Enable debug logging")

    cats = sub.add_parser("categories", parents=[common], help="List breakdown categories")
    cats.set_defaults(func=cmd_categories)

    # Check command
    chk = sub.add_parser("check", parents=[common], help="Validate a listing's breakdowns")
    chk.add_argument("listing", help="Listing record (YAML)")
    chk.add_argument(
        "--category",
        action="append",
        default=None,
        help="Category key to check (repeatable, default: all)",
    )
    chk.set_defaults(func=cmd_check)

    # Distribute command
    dist = sub.add_parser("distribute", parents=[common], help="Auto-distribute breakdowns to 100%%")
    dist.add_argument("listing", help="Listing record (YAML)")
    dist.add_argument(
        "--category",
        action="append",
        default=None,
        help="Category key to adjust (repeatable, default: all)",
    )
    dist.add_argument("--write", action="store_true", help="Save adjusted values back to the listing file")
    dist.set_defaults(func=cmd_distribute)

    # Report command
    rep = sub.add_parser("report", parents=[common], help="Batch report from a CSV of listings")
    rep.add_argument("csv", help="CSV with one column per slot and optional listing_id")
    rep.add_argument("--category", required=True, help="Category key the columns belong to")
    rep.add_argument("--distribute", action="store_true", help="Auto-distribute every row before reporting")
    rep.add_argument("--output", default=None, help="Write the (distributed) table to this CSV")
    rep.set_defaults(func=cmd_report)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    raise SystemExit(run(args))


if __name__ == "__main__":
    main()
