"""Testing helpers."""

from typing import Iterable
from contextlib import contextmanager

from sqlalchemy import Boolean, Column, Integer, MetaData, String, Table, \
    create_engine
from sqlalchemy.orm import Session

USERS = [
    {'id': 1, 'name': 'Ada', 'email': 'ada@example.com', 'is_admin': True,
     'password': '$2b$10$adahash'},
    {'id': 2, 'name': 'Bob', 'email': 'bob@example.com', 'is_admin': False,
     'password': '$2b$10$bobhash'},
    {'id': 3, 'name': 'Cy', 'email': 'cy@example.com', 'is_admin': None,
     'password': '$2b$10$cyhash'},
]
"""Ada is an admin, Bob is not, Cy has no admin flag at all."""


def dataapi_users_table(metadata: MetaData, name: str = 'users') -> Table:
    """The users table as DataAPI creates it, credentials included."""
    return Table(
        name, metadata,
        Column('id', Integer, primary_key=True),
        Column('name', String(255)),
        Column('email', String(255)),
        Column('is_admin', Boolean, nullable=True),
        Column('password', String(255))
    )


@contextmanager
def temporary_db(table_name: str = 'users', users: Iterable[dict] = USERS):
    """Provide an in-memory sqlite database holding a users table."""
    engine = create_engine('sqlite://')
    metadata = MetaData()
    table = dataapi_users_table(metadata, table_name)
    metadata.create_all(engine)
    with engine.begin() as connection:
        for user in users:
            connection.execute(table.insert().values(**user))
    db_session = Session(engine)
    try:
        yield db_session
    finally:
        db_session.close()
        engine.dispose()
