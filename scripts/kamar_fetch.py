"""Fetch records from a KAMAR portal and print them as JSON.

Standalone CLI script. Logs on with the given credentials, runs the
requested commands and writes one JSON object to stdout.

Run with: python scripts/kamar_fetch.py --user 12345 timetable
Several:  python scripts/kamar_fetch.py --user 12345 attendance results ncea
vCard:    python scripts/kamar_fetch.py --user 12345 vcard
Calendar: python scripts/kamar_fetch.py calendar     (no logon needed)

Configuration comes from the environment or .env: KAMAR_PORTAL (required),
KAMAR_YEAR, KAMAR_TIMETABLE_GRID, KAMAR_PASSWORD, LOG_LEVEL, LOG_JSON.

Exit codes:
  0 = success (JSON on stdout)
  1 = error (message on stderr)
"""

import argparse
import asyncio
import json
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.kamar.client import KamarClient  # noqa: E402
from src.kamar.config import get_config  # noqa: E402
from src.kamar.errors import KamarError, StateError  # noqa: E402
from src.kamar.logging import get_logger, setup_logging  # noqa: E402
from src.kamar.session import Session  # noqa: E402

log = get_logger(__name__)

RECORDS = ("calendar", "attendance", "absences", "timetable", "results", "ncea", "details", "vcard")


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Fetch records from a KAMAR portal as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "records",
        nargs="+",
        choices=RECORDS,
        help="Records to fetch, in order.",
    )
    parser.add_argument(
        "--user",
        type=str,
        default=os.getenv("KAMAR_USER", ""),
        help="Student or staff username (default: $KAMAR_USER).",
    )
    parser.add_argument(
        "--search",
        type=str,
        default=None,
        help="Also search students by this criteria (staff key required).",
    )
    return parser.parse_args()


async def main(args: argparse.Namespace) -> int:
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)
    session = Session.from_config(config)

    needs_logon = any(r != "calendar" for r in args.records) or args.search
    output: dict = {}

    async with KamarClient(session, config=config) as kamar:
        credentials = None
        if needs_logon:
            if not args.user:
                log.error("missing_username")
                return 1
            credentials = await kamar.authenticate(args.user, os.getenv("KAMAR_PASSWORD", ""))

        # The timetable needs the week index that attendance establishes
        if "timetable" in args.records and "attendance" not in args.records:
            args.records.insert(args.records.index("timetable"), "attendance")

        for record in args.records:
            if record == "calendar":
                days = await kamar.get_calendar()
                output[record] = {d: day.model_dump() for d, day in days.items()}
            elif record == "attendance":
                try:
                    output[record] = (await kamar.get_attendance(credentials)).model_dump()
                except StateError as e:
                    output[record] = {"weeks": [], "week_index": session.week_index, "note": str(e)}
            elif record == "absences":
                output[record] = await kamar.get_absence_stats(credentials)
            elif record == "timetable":
                output[record] = (await kamar.get_timetable(credentials)).model_dump()
            elif record == "results":
                output[record] = (await kamar.get_results(credentials)).model_dump(mode="json")
            elif record == "ncea":
                output[record] = (await kamar.get_ncea_summary(credentials)).model_dump()
            elif record in ("details", "vcard"):
                details = await kamar.get_details(credentials)
                if record == "details":
                    output[record] = details.model_dump()
                else:
                    output[record] = kamar.make_vcard(credentials, details)

        if args.search:
            hits = await kamar.search_students(credentials, args.search)
            output["search"] = [hit.model_dump() for hit in hits]

    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main(_parse_args())))
    except (KamarError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
