"""
Read access to the shared users table.

The table is owned by DataAPI. Only the columns exposed through
:class:`.domain.Identity` are declared here; any other columns (password
hashes, tokens) are never selected.

+----------+--------------+------+-----+
| Field    | Type         | Null | Key |
+----------+--------------+------+-----+
| id       | int          | NO   | PRI |
| name     | varchar(255) | YES  |     |
| email    | varchar(255) | YES  |     |
| is_admin | tinyint(1)   | YES  |     |
+----------+--------------+------+-----+
"""

from typing import Any, Mapping, NamedTuple, Optional
from functools import lru_cache
import logging

from sqlalchemy import Boolean, Column, Integer, MetaData, String, Table, \
    select
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

FOUND = 'found'
NOT_FOUND = 'not_found'
FAILED = 'failed'


class LookupResult(NamedTuple):
    """Outcome of a user lookup."""

    status: str
    """One of :const:`FOUND`, :const:`NOT_FOUND`, :const:`FAILED`."""

    record: Optional[Mapping[str, Any]] = None
    error: Optional[Exception] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND


@lru_cache(maxsize=None)
def users_table(name: str = 'users') -> Table:
    """Get the table definition for the users table called ``name``."""
    return Table(
        name, MetaData(),
        Column('id', Integer, primary_key=True),
        Column('name', String(255)),
        Column('email', String(255)),
        Column('is_admin', Boolean)
    )


def parse_user_id(value: Any) -> Optional[int]:
    """
    Parse a user id taken from a session.

    User ids are positive integers; the identity service may store them as
    ``int`` or as a string of ASCII digits. Anything else yields ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        user_id = int(value)
        return user_id if user_id > 0 else None
    return None


def find_user(db: Session, table_name: str, user_id: int) -> LookupResult:
    """
    Look up a user record by primary key.

    Errors raised while querying are returned in a :const:`FAILED` result
    rather than raised. ``db`` is rolled back after a failed query, so that
    the rest of the request can still use it.
    """
    table = users_table(table_name)
    query = select(table.c.id, table.c.name, table.c.email,
                   table.c.is_admin).where(table.c.id == user_id)
    try:
        row = db.execute(query).mappings().first()
    except Exception as e:
        logger.debug('Query on %s failed, rolling back: %s', table_name, e)
        try:
            db.rollback()
        except Exception as rollback_error:
            logger.error('Rollback failed: %s', rollback_error)
        return LookupResult(FAILED, error=e)
    if row is None:
        return LookupResult(NOT_FOUND)
    return LookupResult(FOUND, record=dict(row))
