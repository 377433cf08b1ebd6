"""Key identifier derivation and PEM encoding for root CA artifacts."""

import hashlib
import logging

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from pki.ca.errors import TextEncodingError

logger = logging.getLogger(__name__)

CERTIFICATE_PEM_TYPE = "CERTIFICATE"
RSA_PRIVATE_KEY_PEM_TYPE = "RSA PRIVATE KEY"


def modulus_bytes(public_key: rsa.RSAPublicKey) -> bytes:
    """Return the RSA modulus as minimal big-endian bytes."""
    n = public_key.public_numbers().n
    return n.to_bytes((n.bit_length() + 7) // 8, "big")


def compute_key_identifier(public_key: rsa.RSAPublicKey) -> bytes:
    """Compute the SHA-1 key identifier of an RSA public key.

    The digest covers the modulus only, which is not what
    ``x509.SubjectKeyIdentifier.from_public_key`` hashes. It is used for both
    the subject and the authority key identifier of a root certificate.

    Returns:
        20-byte SHA-1 digest.
    """
    return hashlib.sha1(modulus_bytes(public_key)).digest()  # noqa: S324


def encode_certificate_pem(certificate: x509.Certificate) -> str:
    """Encode a certificate as a PEM ``CERTIFICATE`` block.

    Raises:
        TextEncodingError: If encoding fails.
    """
    try:
        return certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")
    except Exception as e:
        logger.error("pem_encoding_failed", extra={"pem_type": CERTIFICATE_PEM_TYPE})
        raise TextEncodingError(f"Failed to write certificate buffer: {e}") from e


def encode_private_key_pem(private_key: rsa.RSAPrivateKey) -> str:
    """Encode an RSA private key as an unencrypted PKCS#1 ``RSA PRIVATE KEY`` block.

    Raises:
        TextEncodingError: If encoding fails.
    """
    try:
        return private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")
    except Exception as e:
        logger.error("pem_encoding_failed", extra={"pem_type": RSA_PRIVATE_KEY_PEM_TYPE})
        raise TextEncodingError(f"Failed to write private key buffer: {e}") from e
