" generic fixtures "
from unittest.mock import Mock

import pytest

from cmdtree.registry import RootRegistry
from cmdtree.requirements import PermissionPolicy

from .testtools import FakeAuthorizer, FakeDispatcher, FakeResolver, FakeSource


def pytest_configure():
    "Runs once before all"
    from cmdtree.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A mocked logger, to check what gets logged"
    return Mock(name="logger")


@pytest.fixture
def operator():
    "A source holding the admin permissions"
    return FakeSource("op", {"ops.admin", "commands.admin.root"})


@pytest.fixture
def visitor():
    "A source without any permission"
    return FakeSource("visitor")


@pytest.fixture
def console():
    "A source which can't be resolved to a principal"
    return FakeSource(None)


@pytest.fixture
def authorizer():
    return FakeAuthorizer()


@pytest.fixture
def policy(authorizer, operator, visitor):
    "Permission policy knowing `operator` and `visitor`"
    return PermissionPolicy(authorizer, FakeResolver(operator, visitor))


@pytest.fixture
def registry(policy, test_logger):
    return RootRegistry(policy=policy, logger=test_logger)


@pytest.fixture
def dispatcher():
    return FakeDispatcher()
