"""
Dashboard pipeline for uploaded run logs.

Orchestrates ingestion, validation and aggregation for one upload.
"""

from runboard.dashboard.pipeline import DashboardPipeline, DashboardResult, process_upload
from runboard.dashboard.reporter import DashboardReporter

__all__ = ["DashboardPipeline", "DashboardReporter", "DashboardResult", "process_upload"]
