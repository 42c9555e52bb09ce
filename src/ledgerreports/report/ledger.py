"""Ledger source reading — CSV rows of ``date,account,_,debit,credit``."""

import csv
import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator

from ledgerreports.domain.errors import AggregationError

logger = logging.getLogger(__name__)

LEDGER_SUFFIX = ".csv"
CENT = Decimal("0.01")
ZERO = Decimal("0")
# Max integer digits per amount; two-decimal totals must fit the 28-digit context
MAX_AMOUNT_DIGITS = 18


@dataclass(frozen=True)
class LedgerRow:
    date: str
    account: str
    debit: Decimal
    credit: Decimal

    @property
    def net(self) -> Decimal:
        return self.debit - self.credit

    @property
    def year(self) -> str:
        """Calendar year of the row date, as a string key."""
        try:
            return str(date.fromisoformat(self.date.strip()[:10]).year)
        except ValueError:
            raise AggregationError(f"Invalid ledger date {self.date!r} for account {self.account!r}") from None


def format_amount(value: Decimal) -> str:
    """Two decimals, half-up, never ``-0.00``."""
    rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:.2f}"


def _parse_amount(raw: str, path: Path, line_no: int) -> Decimal:
    raw = raw.strip()
    if not raw:
        return ZERO
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite() or amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise AggregationError(f"{path.name}:{line_no}: invalid amount {raw!r}")
    return amount


def ledger_files(source_dir: Path, exclude_name: str | None = None) -> list[Path]:
    """CSV files in ``source_dir`` sorted by name, minus ``exclude_name``."""
    if not source_dir.is_dir():
        raise AggregationError(f"Ledger source directory not found: {source_dir}")
    return sorted(
        p
        for p in source_dir.iterdir()
        if p.is_file() and p.suffix == LEDGER_SUFFIX and p.name != exclude_name
    )


def parse_file(path: Path) -> Iterator[LedgerRow]:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise AggregationError(f"Cannot read ledger file {path}: {e}") from e

    for line_no, fields in enumerate(csv.reader(content.splitlines()), start=1):
        if not fields or not any(f.strip() for f in fields):
            continue
        # Short rows: missing columns behave as empty
        fields = fields + [""] * (5 - len(fields))
        yield LedgerRow(
            date=fields[0],
            account=fields[1],
            debit=_parse_amount(fields[3], path, line_no),
            credit=_parse_amount(fields[4], path, line_no),
        )


def read_ledger(source_dir: Path, exclude_name: str | None = None) -> Iterator[LedgerRow]:
    """Yield every row of every ledger file in a stable order."""
    files = ledger_files(source_dir, exclude_name)
    logger.debug("Reading %d ledger files from %s", len(files), source_dir)
    for path in files:
        yield from parse_file(path)
