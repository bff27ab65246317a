import pytest
from algopy_testing import AlgopyTestContext, algopy_testing_context

from harness import LaunchpadHarness


@pytest.fixture
def context() -> AlgopyTestContext:
    """Create a fresh testing context for each test."""
    with algopy_testing_context() as ctx:
        yield ctx


@pytest.fixture
def launchpad(context: AlgopyTestContext) -> LaunchpadHarness:
    return LaunchpadHarness(context)
