import io
import logging

import pytest
from prometheus_client import CollectorRegistry

from litconcepts.observability import MetricsRecorder


def _capture_logger_output(logger_name: str):
    logger = logging.getLogger(logger_name)
    buffer = io.StringIO()
    handler = logging.StreamHandler(buffer)
    handler.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger, handler, buffer


def test_metrics_recorder_logs_when_enabled() -> None:
    metrics = MetricsRecorder(enabled=True, namespace="litconcepts.test")
    logger, handler, buffer = _capture_logger_output("litconcepts.metrics")

    try:
        metrics.increment("concepts.tagged_documents", value=3, source="selection")
        metrics.record_timing("concepts.lattice", 0.05, documents=12)
    finally:
        logger.removeHandler(handler)

    output = buffer.getvalue()
    assert "litconcepts.test.concepts.tagged_documents value=3 source=selection" in output
    assert "litconcepts.test.concepts.lattice duration_ms=50 documents=12" in output


def test_metrics_recorder_disabled_suppresses_logs(caplog) -> None:
    metrics = MetricsRecorder(enabled=False)

    with caplog.at_level(logging.INFO, logger="litconcepts.metrics"):
        metrics.increment("concepts.tagged_documents")
        metrics.set_gauge("concepts.count", 4)
        with metrics.track_timing("concepts.lattice"):
            pass

    assert not caplog.records


def test_track_timing_records_on_exception(caplog) -> None:
    metrics = MetricsRecorder()

    with caplog.at_level(logging.INFO, logger="litconcepts.metrics"):
        with pytest.raises(RuntimeError):
            with metrics.track_timing("concepts.naming"):
                raise RuntimeError("boom")

    assert "litconcepts.concepts.naming duration_ms=" in caplog.text


def test_prometheus_export() -> None:
    registry = CollectorRegistry()
    metrics = MetricsRecorder(prometheus_enabled=True, registry=registry)

    metrics.set_gauge("concepts.count", 7)
    metrics.increment("concepts.tagged_documents", value=2)
    metrics.increment("concepts.tagged_documents", value=1)

    assert registry.get_sample_value("litconcepts_concepts_count") == 7
    assert registry.get_sample_value("litconcepts_concepts_tagged_documents_total") == 3
