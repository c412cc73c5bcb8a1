# scripts/test/check_backend.py
"""
Checks connectivity to the hosted data backend and that every admin table is readable.
Usage: python scripts/test/check_backend.py
       python scripts/test/check_backend.py --table vehicles
"""

import sys
import os
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import requests
from app.config import settings

TABLES = ["vehicles", "drivers", "trips", "maintenance"]


def _headers() -> dict:
    return {"apikey": settings.BACKEND_KEY, "Authorization": f"Bearer {settings.BACKEND_KEY}"}


def check_table(table: str) -> dict:
    url = f"{settings.BACKEND_URL.rstrip('/')}/rest/v1/{table}"
    try:
        resp = requests.get(url, headers=_headers(), params={"select": "*", "limit": "1"}, timeout=5)
        if resp.status_code == 200:
            return {"status": "ok", "sample_rows": len(resp.json())}
        elif resp.status_code in (401, 403):
            return {"status": "auth_failed", "hint": "Check BACKEND_KEY and the table's access policy"}
        elif resp.status_code == 404:
            return {"status": "missing", "hint": f"Table '{table}' does not exist"}
        else:
            return {"status": f"http_{resp.status_code}", "hint": resp.text[:200]}

    except requests.exceptions.ConnectTimeout:
        return {"status": "timeout", "hint": "Backend unreachable, check BACKEND_URL and network"}
    except requests.exceptions.ConnectionError:
        return {"status": "connection_refused", "hint": "No service at BACKEND_URL"}
    except requests.exceptions.RequestException as e:
        return {"status": f"error: {e}"}


def main():
    parser = argparse.ArgumentParser(description="Check the hosted backend")
    parser.add_argument("--table", choices=TABLES, help="Check a single table")
    args = parser.parse_args()

    if not settings.backend_configured:
        print("BACKEND_URL / BACKEND_KEY are not set, nothing to check")
        sys.exit(1)

    print(f"Backend: {settings.BACKEND_URL}")
    print("=" * 60)

    failures = 0
    for table in ([args.table] if args.table else TABLES):
        result = check_table(table)
        print(f"  {table:<12} {result['status']}")
        if result.get("hint"):
            print(f"               {result['hint']}")
        if result["status"] != "ok":
            failures += 1

    print("=" * 60)
    print("All tables reachable" if not failures else f"{failures} table(s) failed")
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
