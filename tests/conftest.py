from __future__ import annotations

import os

import pytest

os.environ.setdefault("APP_ENV", "testing")

from fakes import World, build_world  # noqa: E402
from klas_api.main import create_app  # noqa: E402


@pytest.fixture
def world() -> World:
    return build_world()


@pytest.fixture
def client(world: World):
    app = create_app(container=world.container)
    return app.test_client()
