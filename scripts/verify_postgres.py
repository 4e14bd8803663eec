from __future__ import annotations

import json
import os
import sys

# Ensure app/ is importable when running as a script.
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from app.models import company, job  # noqa: E402
from app.db.postgres import query_one  # noqa: E402


def main() -> int:
    print("Verifying PostgreSQL connectivity using DB_* env vars...\n")

    stats = {
        "companies": query_one("SELECT COUNT(*) AS c FROM companies") or {},
        "jobs": query_one("SELECT COUNT(*) AS c FROM jobs") or {},
    }
    counts = {k: int(v.get("c") or 0) for k, v in stats.items()}
    print("Counts:")
    print(json.dumps(counts, indent=2))

    companies = company.find_all({"name": "a", "minEmployees": 1})
    print("\nSample /companies?name=a&minEmployees=1 (top 5):")
    print(json.dumps(companies[:5], indent=2, ensure_ascii=False))

    jobs = job.find_all({"hasEquity": True})
    print("\nSample /jobs?hasEquity=true (top 5):")
    print(json.dumps(jobs[:5], indent=2, ensure_ascii=False, default=str))

    print("\nOK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
