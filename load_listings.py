import json
import sys
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def read_items(path):
    """Read a JSON file holding a list of listing objects (or {"listings": [...]})."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("listings", [])
    return [it for it in data if isinstance(it, dict)]


def load(items):
    from directory.db import Base, SessionLocal, engine
    from directory.services import ingest_listing
    from directory.utils import logger

    Base.metadata.create_all(bind=engine)
    saved, failed = 0, 0
    db = SessionLocal()
    try:
        for it in items:
            try:
                ingest_listing(db, dict(it))
                saved += 1
            except ValueError as e:
                logger.warning("Skipping listing %s: %s", it.get("id"), e)
                failed += 1
    finally:
        db.close()
    return saved, failed


if __name__ == "__main__":
    if len(sys.argv) != 2:
        raise SystemExit("usage: python load_listings.py <listings.json>")

    items = read_items(sys.argv[1])
    print(f"Read {len(items)} listing(s) from {sys.argv[1]}. Saving to DB...")
    saved, failed = load(items)
    print(f"Saved {saved} listing(s), skipped {failed}.")
