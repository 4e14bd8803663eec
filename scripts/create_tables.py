from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from app.config import build_db_url, mask_db_url, settings  # noqa: E402
from app.db.schema import create_tables, drop_tables  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create the companies/jobs tables in the configured PostgreSQL DB (EXPLICIT action)."
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing companies/jobs tables first. Destroys their data.",
    )
    parser.add_argument(
        "--i-understand",
        action="store_true",
        help="Required safety flag. Prevents accidental DDL against shared DBs.",
    )
    args = parser.parse_args(argv)

    if not args.i_understand:
        print("Refusing to run without --i-understand (safety).")
        return 2

    print("creating tables on:", mask_db_url(build_db_url(settings)))
    if args.drop:
        drop_tables()
    create_tables()
    print("done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
