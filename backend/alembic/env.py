"""
Alembic migration environment for the booking schema.
Migrations run online over the synchronous DATABASE_URL_SYNC connection.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

import hotel_booking.models  # noqa: F401 - registers every table on Base.metadata
from hotel_booking.core.config import get_settings
from hotel_booking.db.base import Base

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

connectable = create_engine(get_settings().DATABASE_URL_SYNC, poolclass=pool.NullPool)

with connectable.connect() as connection:
    context.configure(connection=connection, target_metadata=Base.metadata)
    with context.begin_transaction():
        context.run_migrations()
