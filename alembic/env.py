import asyncio
import sys
from pathlib import Path

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

project_root = Path(__file__).resolve().parents[1]
if str(project_root / "src") not in sys.path:
    sys.path.insert(0, str(project_root / "src"))

# the project .env applies whatever directory alembic is run from
load_dotenv(dotenv_path=project_root / ".env", override=False)

from onboardhub.config import Settings  # noqa: E402
from onboardhub.core.models import BaseModel  # noqa: E402

target_metadata = BaseModel.metadata


def migration_url() -> str:
    """``sqlalchemy.url`` from alembic.ini when set, else the app's DATABASE_URL."""
    url = context.config.get_main_option("sqlalchemy.url") or Settings().database_url
    if not url.startswith("postgresql+asyncpg"):
        raise RuntimeError(f"Migrations target PostgreSQL through asyncpg, got: {url}")
    return url


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


def _migrate(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(migration_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


def run_migrations_offline() -> None:
    """Emit SQL without a database connection."""
    _configure(url=migration_url(), literal_binds=True, compare_server_default=True)
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
