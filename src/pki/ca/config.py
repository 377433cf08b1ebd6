"""Issuance parameters for the root CA."""

from dataclasses import dataclass

from shared.config import Settings

MIN_KEY_SIZE = 1024


@dataclass(frozen=True)
class CAConfig:
    """Fixed identity and policy of the issued root CA.

    The subject fields describe the issuing system, not the caller. Tests can
    shrink ``validity_days`` or ``key_size`` to speed things up.
    """

    organization: str = "Aurae"
    organizational_unit: str = "Runtime"
    street_address: str = "aurae"
    locality: str = "aurae"
    country: str = "IS"
    validity_days: int = 9999
    key_size: int = 2048
    public_exponent: int = 65537
    file_mode: int = 0o600
    directory_mode: int = 0o700

    def __post_init__(self) -> None:
        if self.validity_days <= 0:
            raise ValueError(f"validity_days must be positive, got {self.validity_days}")
        if self.key_size < MIN_KEY_SIZE:
            raise ValueError(f"key_size must be at least {MIN_KEY_SIZE}, got {self.key_size}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "CAConfig":
        """Build a config from ``CA_*`` environment settings."""
        return cls(
            organization=settings.CA_ORGANIZATION,
            organizational_unit=settings.CA_ORGANIZATIONAL_UNIT,
            street_address=settings.CA_STREET_ADDRESS,
            locality=settings.CA_LOCALITY,
            country=settings.CA_COUNTRY,
            validity_days=settings.CA_VALIDITY_DAYS,
            key_size=settings.CA_KEY_SIZE,
        )
