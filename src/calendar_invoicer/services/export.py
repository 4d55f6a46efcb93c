from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, Union

from ..domain import InvoiceLine, Month

logger = logging.getLogger(__name__)

CSV_HEADER = ["Date", "Client", "Sub Client", "Num Hours", "Job", "Rate", "Total"]


def invoice_filename(year: int, month: Union[Month, int, str]) -> str:
    return f"{year}-{Month.from_value(month).code}-invoice.csv"


def write_invoice_csv(lines: Iterable[InvoiceLine], path: Path) -> Path:
    path = Path(path)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        for line in lines:
            writer.writerow(line.to_row())
            count += 1
    logger.info("Wrote %d invoice lines to %s", count, path)
    return path


def export_invoice(
    lines: Iterable[InvoiceLine],
    year: int,
    month: Union[Month, int, str],
    directory: Path,
) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return write_invoice_csv(lines, directory / invoice_filename(year, month))
