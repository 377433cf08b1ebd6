"""Self-signed root CA issuance.

Generates an RSA key pair and a certificate that names that key as its own
issuer, then returns both as PEM text and optionally writes them to disk.
"""

import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from opentelemetry import trace

from pki.ca.config import CAConfig
from pki.ca.encoding import compute_key_identifier, encode_certificate_pem, encode_private_key_pem
from pki.ca.errors import (
    CertificateEncodingError,
    IssuanceError,
    KeyGenerationError,
    PersistenceError,
    SerialNumberError,
)
from pki.ca.storage import write_ca_files
from pki.metrics import pki_metrics

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

SERIAL_NUMBER_BITS = 128


@dataclass(frozen=True)
class CABundle:
    """Root CA certificate and private key, both PEM encoded."""

    certificate: str
    key: str

    def as_dict(self) -> dict[str, str]:
        """Field names used for a CA in runtime config files."""
        return {"cert": self.certificate, "key": self.key}


def generate_serial_number() -> int:
    """Draw a uniformly random serial number below 2**128.

    X.509 serials must be positive, so the (2**-128 likely) zero draw is
    repeated.

    Raises:
        SerialNumberError: If the OS random source fails.
    """
    try:
        while True:
            serial = int.from_bytes(os.urandom(SERIAL_NUMBER_BITS // 8), "big")
            if serial:
                return serial
    except Exception as e:
        raise SerialNumberError(f"Failed to generate serial number: {e}") from e


class RootCAIssuer:
    """Issues self-signed root CA bundles.

    Certificate attributes:
    - Subject == Issuer: C, O, OU, L, street from config, CN=<domain_name> (omitted if empty)
    - SAN: DNS=<domain_name>
    - Validity: now() to now() + validity_days (default 9999)
    - Basic Constraints: CA (critical)
    - Key Usage: Digital Signature, Certificate Sign, CRL Sign (critical)
    - Subject Key Identifier == Authority Key Identifier == SHA-1(modulus)
    - Key: RSA, key_size bits (default 2048), signed with SHA-256
    """

    def __init__(self, config: CAConfig | None = None) -> None:
        self._config = config or CAConfig()

    @property
    def config(self) -> CAConfig:
        return self._config

    def issue(self, output_path: str | os.PathLike[str] | None, domain_name: str) -> CABundle:
        """Issue a new root CA and optionally write it to ``output_path``.

        Args:
            output_path: Directory for ``ca.crt`` and ``ca.key``. Empty or None
                skips the filesystem entirely.
            domain_name: Used verbatim as Common Name and sole DNS SAN.

        Returns:
            The freshly generated CABundle.

        Raises:
            IssuanceError: The subclass names the failed step. A
                PersistenceError carries the computed bundle as ``bundle``.
        """
        with tracer.start_as_current_span("RootCAIssuer.issue") as span:
            span.set_attribute("domain_name", domain_name)
            span.set_attribute("key_size", self._config.key_size)
            span.set_attribute("validity_days", self._config.validity_days)

            start_time = time.time()
            persisted = bool(os.fspath(output_path) if output_path is not None else "")

            try:
                private_key = self._generate_key()
                certificate = self._build_certificate(private_key, domain_name, span)

                bundle = CABundle(
                    certificate=encode_certificate_pem(certificate),
                    key=encode_private_key_pem(private_key),
                )

                if persisted:
                    self._persist(output_path, bundle)

            except IssuanceError as e:
                pki_metrics.record_issuance_failed(e.stage)
                span.set_attribute("failed_stage", e.stage)
                logger.error(
                    "root_ca_issuance_failed",
                    extra={"domain_name": domain_name, "stage": e.stage, "error": str(e)},
                )
                raise

            span.set_attribute("persisted", persisted)

            generation_time = time.time() - start_time
            pki_metrics.record_root_ca_issued(generation_time, persisted)

            logger.info(
                "root_ca_issued",
                extra={
                    "domain_name": domain_name,
                    "serial": format(certificate.serial_number, "032x"),
                    "not_after": certificate.not_valid_after_utc.isoformat(),
                    "persisted": persisted,
                    "duration_seconds": generation_time,
                },
            )

            return bundle

    def _generate_key(self) -> rsa.RSAPrivateKey:
        try:
            return rsa.generate_private_key(
                public_exponent=self._config.public_exponent,
                key_size=self._config.key_size,
            )
        except Exception as e:
            raise KeyGenerationError(f"Failed to generate private key: {e}") from e

    def _subject(self, domain_name: str) -> x509.Name:
        attributes = [
            x509.NameAttribute(NameOID.COUNTRY_NAME, self._config.country),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, self._config.organization),
            x509.NameAttribute(
                NameOID.ORGANIZATIONAL_UNIT_NAME, self._config.organizational_unit
            ),
            x509.NameAttribute(NameOID.LOCALITY_NAME, self._config.locality),
            x509.NameAttribute(NameOID.STREET_ADDRESS, self._config.street_address),
        ]
        # Domain names are not validated; an empty one leaves CN out and a long
        # one skips the 64 byte upper bound on CN.
        if domain_name:
            attributes.append(
                x509.NameAttribute(NameOID.COMMON_NAME, domain_name, _validate=False)
            )
        return x509.Name(attributes)

    def _build_certificate(
        self,
        private_key: rsa.RSAPrivateKey,
        domain_name: str,
        span: trace.Span,
    ) -> x509.Certificate:
        public_key = private_key.public_key()

        serial_number = generate_serial_number()
        span.set_attribute("serial", format(serial_number, "032x"))

        # A self-signed root names its own key as the authority, so SKI and
        # AKI carry the same digest.
        key_id = compute_key_identifier(public_key)

        now = datetime.now(timezone.utc)
        not_before = now
        not_after = now + timedelta(days=self._config.validity_days)

        try:
            subject = issuer = self._subject(domain_name)

            cert_builder = (
                x509.CertificateBuilder()
                .subject_name(subject)
                .issuer_name(issuer)
                .public_key(public_key)
                .serial_number(serial_number)
                .not_valid_before(not_before)
                .not_valid_after(not_after)
                .add_extension(
                    x509.BasicConstraints(ca=True, path_length=None),
                    critical=True,
                )
                .add_extension(
                    x509.KeyUsage(
                        digital_signature=True,
                        key_cert_sign=True,
                        crl_sign=True,
                        key_encipherment=False,
                        content_commitment=False,
                        data_encipherment=False,
                        key_agreement=False,
                        encipher_only=False,
                        decipher_only=False,
                    ),
                    critical=True,
                )
                .add_extension(
                    x509.SubjectAlternativeName([x509.DNSName(domain_name)]),
                    critical=False,
                )
                .add_extension(
                    x509.SubjectKeyIdentifier(key_id),
                    critical=False,
                )
                .add_extension(
                    x509.AuthorityKeyIdentifier(
                        key_identifier=key_id,
                        authority_cert_issuer=None,
                        authority_cert_serial_number=None,
                    ),
                    critical=False,
                )
            )

            return cert_builder.sign(private_key, hashes.SHA256())
        except Exception as e:
            raise CertificateEncodingError(f"Failed to create certificate: {e}") from e

    def _persist(self, output_path: str | os.PathLike[str], bundle: CABundle) -> None:
        try:
            write_ca_files(
                output_path,
                bundle.certificate,
                bundle.key,
                file_mode=self._config.file_mode,
                directory_mode=self._config.directory_mode,
            )
        except PersistenceError as e:
            e.bundle = bundle
            raise


def create_root_ca(
    output_path: str | os.PathLike[str] | None,
    domain_name: str,
    config: CAConfig | None = None,
) -> CABundle:
    """Issue a root CA with ``config`` (defaults if omitted).

    See ``RootCAIssuer.issue``.
    """
    return RootCAIssuer(config).issue(output_path, domain_name)
