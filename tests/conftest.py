import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from capability_provider import RSAProvider

# smallest accepted modulus keeps key generation fast
TEST_KEY_SIZE = 1024


@pytest.fixture(scope="session")
def provider():
    return RSAProvider(key_size=TEST_KEY_SIZE)


@pytest.fixture(scope="session")
def oaep_provider():
    return RSAProvider(key_size=TEST_KEY_SIZE, padding="oaep")
