import pytest

ADDRESS = "0xAbC0000000000000000000000000000000000000"

_ENV_VARS = (
    "QR_WIDTH",
    "QR_MARGIN",
    "QR_DARK",
    "QR_LIGHT",
    "QR_ERROR",
    "ETHQR_CONFIG",
    "ETHQR_CHECKSUM_ADDRESS",
    "ETHQR_OUTPUT_DIR",
    "ETHQR_PORT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def address():
    return ADDRESS
