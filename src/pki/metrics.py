"""OpenTelemetry metrics for the PKI module."""

from opentelemetry import metrics

# Get meter for pki module
meter = metrics.get_meter("pki")

# ============================================================================
# Root CA issuance
# ============================================================================

root_ca_issued_total = meter.create_counter(
    name="pki_root_ca_issued_total",
    description="Total root CA bundles issued",
    unit="1",
)

root_ca_issuance_failures_total = meter.create_counter(
    name="pki_root_ca_issuance_failures_total",
    description="Total root CA issuance failures by pipeline stage",
    unit="1",
)

root_ca_issuance_duration = meter.create_histogram(
    name="pki_root_ca_issuance_duration_seconds",
    description="Root CA issuance duration in seconds",
    unit="s",
)

ca_files_written_total = meter.create_counter(
    name="pki_ca_files_written_total",
    description="Total CA files written to disk",
    unit="1",
)


class PKIMetrics:
    """Facade for pki metrics with proper labels."""

    def record_root_ca_issued(self, duration_seconds: float, persisted: bool) -> None:
        """Record a successful issuance. Labels: persisted=true|false"""
        root_ca_issued_total.add(1, {"persisted": str(persisted).lower()})
        root_ca_issuance_duration.record(duration_seconds)

    def record_issuance_failed(self, stage: str) -> None:
        """Record a failed issuance.

        Labels: stage=key_generation|serial_number|certificate|text_encoding|persistence
        """
        root_ca_issuance_failures_total.add(1, {"stage": stage})

    def record_file_written(self, kind: str) -> None:
        """Record a CA file write. Labels: kind=certificate|key"""
        ca_files_written_total.add(1, {"kind": kind})


# Singleton instance
pki_metrics = PKIMetrics()
