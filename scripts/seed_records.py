"""Load elections, candidates and voters from JSON into Supabase."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ballotbox.schemas.election import Candidate, Election  # noqa: E402
from ballotbox.schemas.vote import Voter  # noqa: E402

# Seed section -> (model, conflict column)
SECTIONS: dict[str, tuple[type, str]] = {
    "candidates": (Candidate, "key"),
    "elections": (Election, "key"),
    "voters": (Voter, "voter_id"),
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Upsert elections, candidates and voters from a JSON seed file.",
    )
    parser.add_argument(
        "path",
        type=Path,
        help='JSON file with "elections", "candidates" and/or "voters" arrays.',
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the file without writing anything.",
    )
    return parser.parse_args(argv)


def load_records(payload: dict[str, Any]) -> dict[str, list[dict[str, Any]]]:
    """Validate every seed section and return rows ready to write."""
    unknown = sorted(set(payload) - set(SECTIONS))
    if unknown:
        raise ValueError(f"Unknown seed sections: {', '.join(unknown)}")

    records: dict[str, list[dict[str, Any]]] = {}
    for section, (model, _conflict) in SECTIONS.items():
        rows = payload.get(section) or []
        validated = []
        for index, row in enumerate(rows):
            try:
                item = model.model_validate(row)
            except ValidationError as exc:
                raise ValueError(f"{section}[{index}] is invalid: {exc}") from exc
            if isinstance(item, Election):
                validated.append(item.record())
            else:
                validated.append(item.model_dump(exclude_none=True))
        records[section] = validated

    known_candidates = {row["key"] for row in records["candidates"]}
    if known_candidates:
        for election in records["elections"]:
            missing = [key for key in election["candidate_keys"] if key not in known_candidates]
            if missing:
                print(
                    f"warning: election {election['key']!r} references "
                    f"candidates not in this file: {', '.join(missing)}",
                    file=sys.stderr,
                )
    return records


def write_records(records: dict[str, list[dict[str, Any]]]) -> dict[str, int]:
    """Upsert validated rows and return per-table counts."""
    from ballotbox.config import settings
    from ballotbox.services import RecordStore
    from ballotbox.utils.supabase_client import build_http_client, create_db_client

    tables = {
        "candidates": settings.candidates_table,
        "elections": settings.elections_table,
        "voters": settings.voters_table,
    }

    with build_http_client() as http_client:
        store = RecordStore(create_db_client(http_client))
        counts: dict[str, int] = {}
        for section, (_model, conflict) in SECTIONS.items():
            for row in records[section]:
                store.upsert_one(tables[section], row, on_conflict=conflict)
            counts[section] = len(records[section])
    return counts


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)
    payload = json.loads(args.path.read_text(encoding="utf-8"))
    records = load_records(payload)
    if args.dry_run:
        counts = {section: len(rows) for section, rows in records.items()}
    else:
        counts = write_records(records)
    for section, count in counts.items():
        print(f"{section}: {count}")


if __name__ == "__main__":
    main()
