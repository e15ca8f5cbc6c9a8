#!/usr/bin/env python3
"""
Load the sample song catalogue into a Song Library SQLite database.

The schema is created (migrations applied) if needed.  Seed songs are
only inserted into an empty ``songs`` table unless ``--force`` is
given, in which case they are appended to the existing rows.

Usage:
    python seed_songs.py --db ./song_library_api/songs.db
    python seed_songs.py --db ./song_library_api/songs.db --force
"""

import argparse
import os
import sys

from song_library_api.app.core import db
from song_library_api.app.core.config import settings


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Seed the Song Library database (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./song_library_api/songs.db)")
    ap.add_argument("--force", action="store_true", help="Insert the seed songs even if the table is not empty.")
    args = ap.parse_args(argv)

    db_path = os.path.abspath(args.db)
    if not os.path.isdir(os.path.dirname(db_path)):
        print(f"[!] Directory not found: {os.path.dirname(db_path)}", file=sys.stderr)
        return 1

    settings.database_url = db_path
    # Seeding is decided here rather than by init_db.
    settings.seed_database = False
    db.init_db()

    with db.get_cursor() as cursor:
        count = cursor.execute("SELECT COUNT(*) AS n FROM songs").fetchone()["n"]
        if count and not args.force:
            print(f"[=] {count} songs already present, nothing inserted (use --force to add anyway)")
            return 0
        inserted = db.seed_songs(cursor)
    print(f"[+] Inserted {inserted} songs into {db_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
