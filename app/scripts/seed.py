"""
Create or repair the data file with the demo accounts. Run from project root:
  python -m app.scripts.seed [--data-file PATH]
Demo accounts: stationUser/5678 (station), companyAdmin/1234 (company).
Safe to run repeatedly; existing users and complaints are left alone.
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.errors import StorageError
from app.core.storage import DEMO_USERS, JsonFileStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Seed the dashboard data file with demo users.")
    parser.add_argument(
        "--data-file",
        default=settings.DATA_FILE,
        help=f"JSON data file (default: {settings.DATA_FILE})",
    )
    args = parser.parse_args(argv)

    try:
        store = JsonFileStore(
            args.data_file,
            seed_demo_users=True,
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
    except StorageError as e:
        logger.error("Seeding failed: %s", e.message)
        return 1

    document = store.snapshot()
    logger.info(
        "Data file %s ready: users=%s complaints=%s",
        store.path,
        len(document.users),
        len(document.complaints),
    )
    accounts = ", ".join(f"{u['username']}/{u['password']} ({u['role']})" for u in DEMO_USERS)
    print(f"Demo accounts: {accounts}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
