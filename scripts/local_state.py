# scripts/local_state.py
# Inspect or reset the client state kept in OASIS_STORE_BACKEND.
#   python scripts/local_state.py feed --limit 5
#   python scripts/local_state.py reset
from pathlib import Path
import sys
API_ROOT = Path(__file__).resolve().parents[1] / "backend" / "api"
sys.path.append(str(API_ROOT))

import argparse
import json
import logging

from db.local_store import store_from_env
from services.incident_state import IncidentStateManager


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Oasis local state helper")
    sub = parser.add_subparsers(dest="command", required=True)
    feed = sub.add_parser("feed", help="print the recent activity feed")
    feed.add_argument("--limit", type=int, default=10)
    sub.add_parser("reset", help="erase stored incidents/alerts (defaults come back)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    manager = IncidentStateManager(store_from_env())

    if args.command == "feed":
        rows = [item.model_dump(mode="json") for item in manager.get_recent_activities(args.limit)]
        print(json.dumps(rows, indent=2))
    elif args.command == "reset":
        manager.clear_all_data()
    return 0


if __name__ == "__main__":
    sys.exit(main())
