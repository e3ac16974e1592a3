"""Seed the configured database with sample menus and records for one user.

Usage: python scripts/seed_db.py you@example.com
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import training_log modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from training_log.core.config import get_settings
from training_log.db.session import create_storage
from training_log.repositories import MenuRepository, RecordRepository, UserRepository
from training_log.services.seed import seed_sample_data


async def main(email: str) -> int:
    settings = get_settings()
    storage = create_storage(settings)
    await storage.initialize()
    try:
        row = await UserRepository(storage).get_by_email(email.strip().lower())
        if row is None:
            print(f"No user registered with {email}; register through /api/auth/register first.")
            return 1
        menus = await seed_sample_data(MenuRepository(storage), RecordRepository(storage), row["id"])
        print(f"Seeded {len(menus)} menus for {email}.")
        return 0
    finally:
        await storage.dispose()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1])))
