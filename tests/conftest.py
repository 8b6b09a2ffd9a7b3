#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import io
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from boundshow.showing import Budget


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def sink() -> Callable[[int], tuple[io.StringIO, Budget]]:
    """Fixture to create a fresh output buffer and budget for one render call."""

    def _create_sink(rest: int = 80) -> tuple[io.StringIO, Budget]:
        return io.StringIO(), Budget(rest)

    return _create_sink
