import pytest

from payments.gateway.fake_adapter import FakeGateway


@pytest.fixture()
def gateway():
    return FakeGateway()
