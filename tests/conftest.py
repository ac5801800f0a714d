import os

import pytest

from repositories.factory import create_memory_repositories, create_postgres_repositories

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest.fixture(params=["memory", "postgres"])
def repos(request):
    """The four repositories on a fresh, empty store, once per backend."""
    if request.param == "memory":
        yield create_memory_repositories()
        return

    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")

    from db.connection import close_pool
    from db.init_db import reset_tables

    wired = create_postgres_repositories(TEST_DATABASE_URL)
    reset_tables()
    try:
        yield wired
    finally:
        close_pool()


@pytest.fixture
def memory_repos():
    return create_memory_repositories()
