"""Financials report service - payload in, report or CSV export out"""

import logging
import time
import uuid
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from portfolio_insights.config import settings
from portfolio_insights.domain.aggregator import build_financials_report
from portfolio_insights.domain.exceptions import NoDataToExportError
from portfolio_insights.domain.models import FinancialsReport, KPISnapshot
from portfolio_insights.exports.csv_export import generate_csv, report_filename
from portfolio_insights.observability.logging import log_export, log_report_generated, setup_logging
from portfolio_insights.observability.metrics import (
    csv_export_counter,
    record_report,
    report_duration_histogram,
)
from portfolio_insights.schemas import FinancialsKPIPayload

logger = logging.getLogger(__name__)

SnapshotSource = Union[KPISnapshot, Mapping[str, Any]]


class FinancialsReportService:
    """
    Stateless entry point for the presentation layer.

    Accepts either a KPISnapshot or the backend's raw snake_case payload.
    Holds no state between calls; construct once and share.
    """

    def __init__(self, metrics_enabled: Optional[bool] = None):
        self.metrics_enabled = settings.metrics_enabled if metrics_enabled is None else metrics_enabled

    def to_snapshot(self, source: SnapshotSource) -> KPISnapshot:
        """
        Normalize the input into a KPISnapshot.

        Raises:
            ValidationError: When the payload structure (not its numbers) is malformed
        """
        if isinstance(source, KPISnapshot):
            return source

        try:
            return FinancialsKPIPayload.model_validate(source).to_snapshot()
        except ValidationError as e:
            logger.warning(f"Malformed KPI payload: {e.error_count()} errors")
            raise

    def generate_report(
        self,
        source: SnapshotSource,
        now: Optional[datetime] = None,
        request_id: Optional[str] = None,
    ) -> FinancialsReport:
        """
        Build the full financials report for one snapshot.

        Flow:
        1. Normalize payload into a snapshot
        2. Run every analytics component via the aggregator
        3. Record metrics and a structured log line
        """
        start_time = time.time()
        request_id = request_id or str(uuid.uuid4())

        snapshot = self.to_snapshot(source)
        report = build_financials_report(snapshot, now=now)

        duration = time.time() - start_time
        if self.metrics_enabled:
            record_report(report)
            report_duration_histogram.observe(duration)

        log_report_generated(
            request_id,
            report.portfolio_health.grade,
            report.risk_assessment.level,
            [alert.id for alert in report.alerts],
            len(report.recommendations),
            duration * 1000,
        )

        return report

    def export_csv(
        self,
        source: Optional[SnapshotSource],
        now: Optional[datetime] = None,
        request_id: Optional[str] = None,
    ) -> tuple[str, str]:
        """
        Render the snapshot as a CSV download.

        Returns: (filename, csv_text)

        Raises:
            NoDataToExportError: When no snapshot has been loaded yet
        """
        if source is None:
            raise NoDataToExportError("No data to export")

        request_id = request_id or str(uuid.uuid4())
        snapshot = self.to_snapshot(source)

        content = generate_csv(snapshot)
        filename = report_filename(now)

        if self.metrics_enabled:
            csv_export_counter.inc()
        log_export(request_id, filename, len(content.encode("utf-8")))

        return filename, content


def create_service() -> FinancialsReportService:
    """Build the service for an application process, with JSON logging at the configured level"""
    setup_logging(settings.log_level)
    return FinancialsReportService()
