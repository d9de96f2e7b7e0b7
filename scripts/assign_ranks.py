"""Recompute college, batch, branch and class ranks.

Ranks a JSON dataset (a list of result documents) in place, or the
``results`` collection of the configured MongoDB database. Prints the run
report as JSON.

Usage:
    python scripts/assign_ranks.py --json data/results.json
    python scripts/assign_ranks.py --json data/results.json -o ranked.json
    python scripts/assign_ranks.py            # uses MONGO_URI / MONGO_DATABASE
    python scripts/assign_ranks.py --remote   # POSTs to STANDINGS_API_URL
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from standings.aggregate import SourceUnavailable, recompute_ranks
from standings.config import get_settings
from standings.models import StudentResult
from standings.remote import RemoteTriggerError, trigger_rank_assignment
from standings.stores.base import ResultStore
from standings.stores.memory import InMemoryResultStore


def load_json_store(path: Path) -> InMemoryResultStore:
    documents = json.loads(path.read_text(encoding="utf-8"))
    return InMemoryResultStore([StudentResult.from_dict(d) for d in documents])


def run(store: ResultStore) -> int:
    """Run the aggregation on ``store``, print the report, return an exit code."""
    try:
        report = recompute_ranks(store)
    except SourceUnavailable as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(json.dumps(report.to_dict(), indent=2))
    return 0 if report.success else 1


def main():
    parser = argparse.ArgumentParser(
        description="Recompute student ranks")
    parser.add_argument("--json", dest="json_path",
                        help="Rank a JSON dataset instead of MongoDB")
    parser.add_argument("-o", "--output",
                        help="Where to write the ranked JSON (default: overwrite input)")
    parser.add_argument("--remote", action="store_true",
                        help="Ask the results server at STANDINGS_API_URL to rank instead")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    if args.remote:
        if not settings.api_url:
            print("ERROR: STANDINGS_API_URL is not set", file=sys.stderr)
            sys.exit(2)
        try:
            data = trigger_rank_assignment(settings.api_url)
        except RemoteTriggerError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(2)
        print(json.dumps(data, indent=2))
        sys.exit(0)

    if args.json_path:
        input_path = Path(args.json_path)
        try:
            store = load_json_store(input_path)
        except (OSError, ValueError, KeyError) as e:
            print(f"ERROR: could not load {input_path}: {e}", file=sys.stderr)
            sys.exit(2)
        code = run(store)
        if code != 2:
            output_path = Path(args.output) if args.output else input_path
            output_path.write_text(
                json.dumps([r.to_dict() for r in store.records()], indent=2),
                encoding="utf-8",
            )
            print(f"Written to {output_path}", file=sys.stderr)
        sys.exit(code)

    from standings.stores.mongo import connect

    result_store, _ = connect(settings)
    sys.exit(run(result_store))


if __name__ == "__main__":
    main()
