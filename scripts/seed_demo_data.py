#!/usr/bin/env python3
"""Seed a demo user with a handful of tasks.

Re-running the script clears the demo user's tasks and recreates them.

Usage:
    # From project root, with DATABASE_URL and JWT_SECRET set:
    python scripts/seed_demo_data.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.database import SessionLocal, init_db  # noqa: E402
from src.models import Task, User  # noqa: E402
from src.services.passwords import get_password_hash  # noqa: E402

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demopass123"

DEMO_TASKS = [
    ("Buy groceries", False),
    ("Renew passport", False),
    ("Book dentist appointment", True),
    ("Water the plants", False),
    ("File expense report", True),
]


def seed_demo_data():
    """Seed the database with a demo user and tasks."""
    init_db()
    session = SessionLocal()

    try:
        user = session.query(User).filter_by(username=DEMO_USERNAME).first()
        if user:
            print("Demo user already exists. Clearing tasks and re-seeding...")
            session.query(Task).filter_by(user_id=user.id).delete()
            session.commit()
        else:
            print("Creating demo user...")
            user = User(username=DEMO_USERNAME, password_hash=get_password_hash(DEMO_PASSWORD))
            session.add(user)
            session.flush()

        session.add_all(
            Task(title=title, completed=completed, user_id=user.id)
            for title, completed in DEMO_TASKS
        )
        session.commit()
        print(f"Seeded {len(DEMO_TASKS)} tasks for '{DEMO_USERNAME}' / '{DEMO_PASSWORD}'")

    except Exception as e:
        session.rollback()
        print(f"Error seeding demo data: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()
