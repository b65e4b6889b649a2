import pytest

from fallscene.shared.errors import reset_reports


@pytest.fixture(autouse=True)
def _fresh_error_reports():
    reset_reports()
    yield
    reset_reports()
