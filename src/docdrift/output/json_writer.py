"""JSON output writer for audit reports."""

import json
from pathlib import Path

from docdrift.config import AuditConfig, config_to_dict
from docdrift.models.report import AuditReport

REPORT_VERSION = "1.0"


def write_report(
    report: AuditReport,
    output_path: Path,
    config: AuditConfig | None = None,
) -> None:
    """Write an audit report as JSON."""
    data = {"version": REPORT_VERSION, **report.to_dict()}
    if config is not None:
        data["config"] = config_to_dict(config)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_report(report_path: Path) -> dict:
    """Load a report written by ``write_report``."""
    with open(report_path, "r", encoding="utf-8") as f:
        return json.load(f)
