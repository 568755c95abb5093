"""Integration tests for the report service, logging and metrics"""

import json
import logging

import pytest
from prometheus_client import REGISTRY
from pydantic import ValidationError

from portfolio_insights.config import settings
from portfolio_insights.domain.exceptions import DomainException, NoDataToExportError
from portfolio_insights.observability.logging import CustomJsonFormatter, setup_logging
from portfolio_insights.service import FinancialsReportService, create_service


def _sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.fixture
def service() -> FinancialsReportService:
    return FinancialsReportService(metrics_enabled=True)


@pytest.mark.integration
def test_generate_report_from_backend_payload(service, backend_payload, fixed_now):
    report = service.generate_report(backend_payload, now=fixed_now)

    assert report.portfolio_health.grade == "A"
    assert report.risk_assessment.level == "low"
    assert report.alerts == []
    assert [r.title for r in report.recommendations] == ["Maintain Excellence"]
    assert report.chart_data.portfolio_trend[-1].formatted_value == "$1.3M"


@pytest.mark.integration
def test_generate_report_records_metrics(service, distressed_snapshot):
    reports_before = _sample("portfolio_reports_total", {"risk_level": "critical"})
    grade_before = _sample("portfolio_health_grade_total", {"grade": "F"})
    dso_before = _sample("portfolio_alerts_total", {"alert_id": "high-dso", "type": "warning"})

    service.generate_report(distressed_snapshot)

    assert _sample("portfolio_reports_total", {"risk_level": "critical"}) == reports_before + 1
    assert _sample("portfolio_health_grade_total", {"grade": "F"}) == grade_before + 1
    assert _sample("portfolio_alerts_total", {"alert_id": "high-dso", "type": "warning"}) == dso_before + 1


@pytest.mark.integration
def test_metrics_can_be_disabled(distressed_snapshot):
    before = _sample("portfolio_reports_total", {"risk_level": "critical"})

    FinancialsReportService(metrics_enabled=False).generate_report(distressed_snapshot)

    assert _sample("portfolio_reports_total", {"risk_level": "critical"}) == before


@pytest.mark.integration
def test_generate_report_logs_outcome(service, distressed_snapshot, caplog):
    caplog.set_level(logging.INFO)

    service.generate_report(distressed_snapshot, request_id="req-123")

    records = [r for r in caplog.records if r.getMessage() == "Report generated"]
    assert len(records) == 1
    record = records[0]
    assert record.request_id == "req-123"
    assert record.health_grade == "F"
    assert record.risk_level == "critical"
    assert record.alert_ids[0] == "high-bad-debt"
    assert record.recommendation_count == 4


@pytest.mark.integration
def test_infinite_payload_values_do_not_raise(service, backend_payload):
    backend_payload["days_sales_outstanding"] = "Infinity"

    report = service.generate_report(backend_payload)

    assert report.alerts[0].id == "high-dso"
    assert report.alerts[0].message == "DSO is ∞ days, above optimal range"
    assert report.summary_metrics.days_outstanding == "∞ days"


@pytest.mark.integration
def test_malformed_payload_is_logged_and_raised(service, caplog):
    caplog.set_level(logging.WARNING)

    with pytest.raises(ValidationError):
        service.generate_report({"portfolio_value_trend": [None]})

    assert any("Malformed KPI payload" in r.getMessage() for r in caplog.records)


@pytest.mark.integration
def test_export_csv(service, healthy_snapshot, fixed_now):
    exports_before = _sample("portfolio_csv_exports_total")

    filename, content = service.export_csv(healthy_snapshot, now=fixed_now)

    assert filename == "financials-report-2026-10-19.csv"
    assert content.startswith("Metric,Value\nTotal Portfolio Value,1250000\n")
    assert _sample("portfolio_csv_exports_total") == exports_before + 1


@pytest.mark.integration
def test_export_csv_accepts_backend_payload(service, backend_payload, healthy_snapshot):
    _, from_payload = service.export_csv(backend_payload)
    _, from_snapshot = service.export_csv(healthy_snapshot)

    assert from_payload == from_snapshot


@pytest.mark.integration
def test_export_without_data_fails(service):
    with pytest.raises(NoDataToExportError, match="No data to export"):
        service.export_csv(None)

    assert issubclass(NoDataToExportError, DomainException)


def test_json_formatter_adds_service_metadata():
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("portfolio_insights.report", logging.INFO, __file__, 1, "Report generated", None, None)

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Report generated"
    assert payload["level"] == "INFO"
    assert payload["service"] == settings.service_name
    assert "timestamp" in payload


def test_setup_logging_installs_single_json_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("DEBUG")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_create_service_applies_configured_log_level(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.setattr(settings, "log_level", "WARNING")
    try:
        service = create_service()

        assert isinstance(service, FinancialsReportService)
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
