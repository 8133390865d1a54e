"""
Manage CMS pages from the command line.

Usage:
    python -m space_dashboard.tools.cms_pages list
    python -m space_dashboard.tools.cms_pages upsert welcome "Welcome" --body "<p>Hello</p>"
    python -m space_dashboard.tools.cms_pages upsert about "About" --body-file about.html
    python -m space_dashboard.tools.cms_pages delete welcome

Uses DATABASE_URL / SPACE_DB_PATH like the services.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from space_dashboard.database import init_db, repositories


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage slug-addressed CMS pages.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List pages")

    up = sub.add_parser("upsert", help="Create or replace a page")
    up.add_argument("slug")
    up.add_argument("title")
    body = up.add_mutually_exclusive_group()
    body.add_argument("--body", default="", help="HTML body")
    body.add_argument("--body-file", type=Path, help="Read HTML body from file")

    rm = sub.add_parser("delete", help="Delete a page")
    rm.add_argument("slug")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_db()

    if args.command == "list":
        for page in repositories.list_pages():
            print(f"{page['slug']}\t{page['title']}\t{page['updated_at']}")
        return 0

    if args.command == "upsert":
        body = args.body_file.read_text(encoding="utf-8") if args.body_file else args.body
        try:
            created = repositories.upsert_page(args.slug, args.title, body)
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        print(("created" if created else "updated") + f": {repositories.normalize_slug(args.slug)}")
        return 0

    slug = repositories.normalize_slug(args.slug)
    if repositories.delete_page(slug):
        print(f"deleted: {slug}")
        return 0
    print(f"not found: {slug}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
