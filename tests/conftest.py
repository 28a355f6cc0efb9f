import pytest

# RFC 4226 appendix D / RFC 6238 appendix B (SHA-1) shared secret
RFC_KEY = "12345678901234567890"


@pytest.fixture
def rfc_key() -> str:
    return RFC_KEY
