from pathlib import Path

from ledgerreports.domain.enums import ReportKind
from ledgerreports.domain.errors import AggregationError
from ledgerreports.report.aggregators import OUTPUT_FILENAMES


def output_path(output_dir: Path, request_id: str, kind: ReportKind) -> Path:
    """``<output_dir>/<request_id>/<kind filename>`` — derived from request_id and kind only."""
    return output_dir / request_id / OUTPUT_FILENAMES[kind]


def write_report(output_dir: Path, request_id: str, kind: ReportKind, body: str) -> Path:
    path = output_path(output_dir, request_id, kind)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    except OSError as e:
        raise AggregationError(f"Cannot write report {path}: {e}") from e
    return path
