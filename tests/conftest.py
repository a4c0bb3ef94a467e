"""
pytest configuration for blindsig tests.
Adds the project root to sys.path so the package imports without installing.
"""
import sys
import os

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from blindsig.schemes import ED25519_SCHEME, RSA_SCHEME


@pytest.fixture(scope="session")
def rsa_keypair():
    return RSA_SCHEME.generate_keypair()


@pytest.fixture(scope="session")
def ed25519_keypair():
    return ED25519_SCHEME.generate_keypair()
