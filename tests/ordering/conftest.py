import pytest


@pytest.fixture(autouse=True)
def _ctx(ordering_bed, notifications_bed):
    with ordering_bed.domain_context():
        yield
