import pytest

from .utils import clear_resampled_test_files


@pytest.fixture(autouse=True)
def resampled_test_files_teardown():
    yield
    clear_resampled_test_files()
