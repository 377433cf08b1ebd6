"""Certificate Authority module for the Aurae runtime PKI.

This module provides:
- Self-signed root CA issuance (RSA key, X.509 certificate, PEM encoding)
- Optional persistence of the CA as ca.crt / ca.key
- The IssuanceError taxonomy for each pipeline step
"""

from pki.ca.config import CAConfig
from pki.ca.errors import (
    CertificateEncodingError,
    IssuanceError,
    KeyGenerationError,
    PersistenceError,
    SerialNumberError,
    TextEncodingError,
)
from pki.ca.root_ca import CABundle, RootCAIssuer, create_root_ca

__all__ = [
    "CABundle",
    "CAConfig",
    "CertificateEncodingError",
    "IssuanceError",
    "KeyGenerationError",
    "PersistenceError",
    "RootCAIssuer",
    "SerialNumberError",
    "TextEncodingError",
    "create_root_ca",
]
