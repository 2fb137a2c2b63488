#!/usr/bin/env python3
"""
Pre-push / production readiness checks.
Run from backend dir with project venv active: python scripts/pre_push_checks.py
"""
import sys
from pathlib import Path

BACKEND = Path(__file__).resolve().parent.parent
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))


def check_imports():
    from forum.main import app  # noqa: F401
    paths = {route.path for route in app.routes}
    for expected in ("/api/pages", "/api/questions/{question_id}", "/api/replies/question/{question_id}"):
        assert expected in paths, f"missing route {expected}"
    return "imports"


def check_init_db():
    from forum.database import init_db
    init_db()
    return "init_db"


def check_seed_idempotent():
    from forum.database import SessionLocal
    from forum.services.pages import seed_default_pages
    db = SessionLocal()
    try:
        seed_default_pages(db)
        assert seed_default_pages(db) == [], "second seed run created pages"
    finally:
        db.close()
    return "seed_default_pages"


def check_secret_key():
    from forum.config import settings, DEFAULT_SECRET_KEY
    if settings.is_production:
        assert settings.secret_key != DEFAULT_SECRET_KEY, "SECRET_KEY is the default in production"
    return "secret_key"


def main():
    checks = [check_imports, check_init_db, check_seed_idempotent, check_secret_key]
    for fn in checks:
        try:
            name = fn()
            print(f"OK {name}")
        except Exception as e:
            print(f"FAIL {fn.__name__}: {e}")
            return 1
    print("All pre-push checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
