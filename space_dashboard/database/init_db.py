"""
Create Space Dashboard tables.

Usage:
    python -m space_dashboard.database.init_db
"""

from space_dashboard.database.session import init_db

if __name__ == "__main__":
    init_db()
    print("Tables ready.")
