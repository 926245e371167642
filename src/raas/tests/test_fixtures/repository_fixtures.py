"""Repository fixtures, bound to the transactional `db_session`."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from raas.repositories import DomainRepository, RubricRepository, UserRepository


@pytest.fixture
def domain_repo(db_session: AsyncSession) -> DomainRepository:
    return DomainRepository(db_session)


@pytest.fixture
def rubric_repo(db_session: AsyncSession) -> RubricRepository:
    return RubricRepository(db_session)


@pytest.fixture
def user_repo(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def sample_user_data() -> dict:
    """Column values for a user row; the password is already a (fake) hash."""
    return {
        "username": "jdoe",
        "email": "jdoe@example.org",
        "password": "$2b$04$abcdefghijklmnopqrstuuabcdefghijklmnopqrstuvwxyzABCDE",
        "enabled": True,
    }
