import sys

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource


def setup_metrics(app_name: str) -> MeterProvider:
    """Configure OpenTelemetry metrics."""

    resource = Resource.create({"service.name": app_name})

    # Console reader; a one-shot CLI has nothing to scrape
    console_reader = PeriodicExportingMetricReader(ConsoleMetricExporter(out=sys.stderr))

    provider = MeterProvider(resource=resource, metric_readers=[console_reader])

    metrics.set_meter_provider(provider)
    return provider
