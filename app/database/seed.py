import asyncio
import logging
import os

from app.config import load_config
from app.database.connection import DatabaseManager
from app.database.models import Person, UserRole
from app.database.repository import PeopleRepository
from app.exceptions import StoreError
from app.utils.security import hash_password


async def run_seed(database: DatabaseManager) -> bool:
    """Create the default admin unless a person with that email exists."""
    logging.info("Running user seeding...")

    admin = Person(
        name=os.getenv("SEED_ADMIN_NAME", "Administrator"),
        email=os.getenv("SEED_ADMIN_EMAIL", "admin@example.com"),
        mobile=os.getenv("SEED_ADMIN_MOBILE", "+10000000000"),
        password=hash_password(os.getenv("SEED_ADMIN_PASSWORD", "Admin123!")),
        role=UserRole.ADMIN,
    )

    if database.people is None:
        logging.error("Cannot seed: database is not connected")
        return False

    repo = PeopleRepository(database.people)
    try:
        if await repo.exists(email=admin.email):
            logging.info(f"User {admin.email} already exists.")
            return False
        created = await repo.insert(admin)
    except StoreError as e:
        logging.error(f"Error seeding users: {e}")
        return False

    logging.info(f"Created admin {created.email} with ID {created.id}")
    return True


async def main() -> None:
    database = DatabaseManager(load_config())
    await database.initialize()
    try:
        await run_seed(database)
    finally:
        await database.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
