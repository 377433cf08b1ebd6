"""Filesystem persistence of root CA bundles.

Layout produced under the output directory:

    ca.crt   PEM certificate, owner read/write only
    ca.key   PEM RSA private key, owner read/write only
"""

import logging
import os
from pathlib import Path

from pki.ca.errors import PersistenceError
from pki.metrics import pki_metrics

logger = logging.getLogger(__name__)

CERT_FILENAME = "ca.crt"
KEY_FILENAME = "ca.key"


def create_output_directory(path: str | os.PathLike[str], mode: int = 0o700) -> Path:
    """Normalise ``path`` and create it with any missing ancestors.

    Only a newly created leaf directory receives ``mode``; ancestors get the
    platform default and an existing directory is left untouched.

    Raises:
        PersistenceError: If the directory cannot be created, e.g. an
            ancestor is a regular file.
    """
    directory = Path(os.path.normpath(os.fspath(path)))
    try:
        directory.mkdir(mode=mode, parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(
            f"Failed to create output directory {directory}: {e}", path=str(directory)
        ) from e
    return directory


def write_string_to_file(path: Path, content: str, mode: int = 0o600) -> None:
    """Write ``content`` to ``path``, truncating it, with permissions ``mode``.

    Raises:
        PersistenceError: If the file cannot be opened or written.
    """
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    except OSError as e:
        raise PersistenceError(f"Failed to open file {path}: {e}", path=str(path)) from e

    try:
        f = os.fdopen(fd, "w", encoding="ascii")
    except Exception as e:
        os.close(fd)
        raise PersistenceError(f"Failed to open file {path}: {e}", path=str(path)) from e

    try:
        with f:
            # O_CREAT leaves the mode of a pre-existing file alone
            os.fchmod(f.fileno(), mode)
            f.write(content)
    except OSError as e:
        raise PersistenceError(f"Failed to write file {path}: {e}", path=str(path)) from e


def write_ca_files(
    path: str | os.PathLike[str],
    certificate_pem: str,
    key_pem: str,
    file_mode: int = 0o600,
    directory_mode: int = 0o700,
) -> tuple[Path, Path]:
    """Write the certificate and key under ``path``.

    The certificate is written first. A failure on the key leaves the new
    certificate next to whatever key was there before, so callers must treat
    any ``PersistenceError`` as a failure of the whole write.

    Returns:
        Paths of the written (certificate, key) files.
    """
    directory = create_output_directory(path, directory_mode)

    cert_path = directory / CERT_FILENAME
    key_path = directory / KEY_FILENAME

    write_string_to_file(cert_path, certificate_pem, file_mode)
    pki_metrics.record_file_written("certificate")

    write_string_to_file(key_path, key_pem, file_mode)
    pki_metrics.record_file_written("key")

    logger.info(
        "ca_files_written",
        extra={"cert_path": str(cert_path), "key_path": str(key_path)},
    )
    return cert_path, key_path
