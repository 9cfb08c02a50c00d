#!/usr/bin/env python3
"""
Register a bug directly in the configured store (BUG_STORE / DATABASE_URL).

Usage:
  python scripts/add_bug.py --title "Login button broken" [--description "..."]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the bugtracker package importable when run from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bugtracker.app import build_store  # noqa: E402
from bugtracker.core.config import get_settings  # noqa: E402
from bugtracker.domain.bugs import BugError  # noqa: E402
from bugtracker.services.bug_service import BugService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a bug in the store")
    ap.add_argument("--title", required=True, help="Bug title")
    ap.add_argument("--description", default="", help="Optional description")
    args = ap.parse_args()

    svc = BugService(build_store(get_settings()))
    try:
        bug = svc.create({"title": args.title, "description": args.description})
    except BugError as exc:
        raise SystemExit(f"Failed: {exc.message}") from exc
    print("OK: bug registered")
    print(f"  ID: {bug.id}")
    print(f"  Title: {bug.title}")
    print(f"  Status: {bug.status}")


if __name__ == "__main__":
    main()
