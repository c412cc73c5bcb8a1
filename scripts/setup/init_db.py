# scripts/setup/init_db.py
"""
Initialize the local backend database: creates all tables and optionally the admin account.
Only needed with BACKEND_MODE=local; the hosted backend owns its own schema.
Usage: python scripts/setup/init_db.py
       python scripts/setup/init_db.py --email admin@example.com --password secret
       python scripts/setup/init_db.py --demo      # seeds DEMO_EMAIL / DEMO_PASSWORD from .env
"""

import sys
import os
import argparse
from datetime import datetime
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.local_backend import hash_password
from app.models.user import User


def seed_user(email: str, password: str, full_name: str = None) -> bool:
    """Create the account unless it exists. Returns True when a row was added."""
    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == email).first():
            return False
        db.add(User(email=email, password_hash=hash_password(password), full_name=full_name,
                    is_confirmed=True, created_at=datetime.utcnow()))
        db.commit()
        return True
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Initialize the local fleet admin database")
    parser.add_argument("--email", help="Admin account email to create")
    parser.add_argument("--password", help="Admin account password")
    parser.add_argument("--demo", action="store_true", help="Create the demo account from DEMO_EMAIL/DEMO_PASSWORD")
    args = parser.parse_args()

    print("Fleet Admin DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except Exception as e:
        print(f"Cannot connect to database: {e}")
        sys.exit(1)

    print("\nCreating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    accounts = []
    if args.email and args.password:
        accounts.append((args.email, args.password))
    if args.demo:
        if not settings.DEMO_EMAIL or not settings.DEMO_PASSWORD:
            print("\n--demo given but DEMO_EMAIL / DEMO_PASSWORD are not set")
            sys.exit(1)
        accounts.append((settings.DEMO_EMAIL, settings.DEMO_PASSWORD))

    for email, password in accounts:
        created = seed_user(email, password)
        print(f"\nAccount {email}: {'created' if created else 'already exists'}")

    print("\nDatabase ready! Start the admin API with BACKEND_MODE=local:")
    print(f"   uvicorn app.main:app --host {settings.APP_HOST} --port {settings.APP_PORT} --reload")


if __name__ == "__main__":
    main()
