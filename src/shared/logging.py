import logging
import sys

from opentelemetry._logs import set_logger_provider
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor, ConsoleLogRecordExporter

from .config import settings


def setup_logging() -> LoggerProvider:
    """Configure OpenTelemetry logging with a console exporter.

    Returns the provider so the caller can flush it before exiting.
    """

    # 1. Setup OpenTelemetry Logger Provider
    logger_provider = LoggerProvider()

    # Log records go to stderr so stdout stays clean for PEM output
    console_exporter = ConsoleLogRecordExporter(out=sys.stderr)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(console_exporter))

    set_logger_provider(logger_provider)

    # 2. Attach OTel LoggingHandler to Python's root logger
    handler = LoggingHandler(
        level=getattr(logging, settings.LOG_LEVEL), logger_provider=logger_provider
    )

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL)

    # Plain stream handler for immediate feedback while OTel batches
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root.addHandler(stream_handler)

    return logger_provider
