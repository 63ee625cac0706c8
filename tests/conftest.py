import pytest

from bazi_cipher.log import set_verbose


@pytest.fixture(autouse=True)
def quiet_logging():
    set_verbose(False)
    yield
    set_verbose(False)
