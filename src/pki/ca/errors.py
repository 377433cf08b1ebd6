"""Exceptions raised while issuing a root CA.

Every stage of the issuance pipeline has its own subclass of
``IssuanceError`` so callers can tell which step failed. The original
exception is always chained as ``__cause__``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pki.ca.root_ca import CABundle


class IssuanceError(Exception):
    """Base class for root CA issuance failures."""

    stage = "issuance"


class KeyGenerationError(IssuanceError):
    """Raised when the RSA key pair cannot be generated."""

    stage = "key_generation"


class SerialNumberError(IssuanceError):
    """Raised when a random serial number cannot be drawn."""

    stage = "serial_number"


class CertificateEncodingError(IssuanceError):
    """Raised when the certificate cannot be built or signed."""

    stage = "certificate"


class TextEncodingError(IssuanceError):
    """Raised when a DER artifact cannot be PEM encoded."""

    stage = "text_encoding"


class PersistenceError(IssuanceError):
    """Raised when the CA files cannot be written.

    Unlike the other failures the bundle was already computed, so it is
    attached as ``bundle`` for callers that can live without the files.
    """

    stage = "persistence"

    def __init__(
        self,
        message: str,
        path: str | None = None,
        bundle: CABundle | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.bundle = bundle
