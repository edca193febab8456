from __future__ import annotations

import pytest

from appsync.adapters.onelogin import JsonAppCodec
from appsync.domain.apps import AppsService
from tests.helpers.remote import FakeRemote


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def codec() -> JsonAppCodec:
    return JsonAppCodec()


@pytest.fixture
def service(remote: FakeRemote, codec: JsonAppCodec) -> AppsService:
    return AppsService(repository=remote, codec=codec, endpoints=remote.endpoints)
