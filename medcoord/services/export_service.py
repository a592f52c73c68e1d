# medcoord/services/export_service.py
"""
Выгрузка остатков и заявок в CSV / XLSX.
JSON отдаёт роутер напрямую через схемы.
"""
from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Iterable, List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from sqlalchemy.orm import Session

from .request_lifecycle import RequestLifecycleService
from .stock_ledger import StockLedgerService

STOCK_HEADERS = ["ID", "Resource", "City", "Postal Code", "Quantity", "Updated At"]
REQUEST_HEADERS = ["ID", "User", "Resource", "Quantity", "Status", "Urgency", "Created At"]

EXPORT_FORMATS = ("csv", "json", "xlsx")


def _fmt_dt(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def stock_rows(db: Session) -> List[list]:
    return [
        [s.id, s.resource.name, s.city, s.postal_code, s.quantity, _fmt_dt(s.updated_at)]
        for s in StockLedgerService.list_stocks(db)
    ]


def request_rows(db: Session) -> List[list]:
    return [
        [
            r.id,
            r.user.display_name if r.user else "",
            r.resource.name,
            r.quantity,
            r.status,
            r.urgency,
            _fmt_dt(r.created_at),
        ]
        for r in RequestLifecycleService.list_requests(db)
    ]


def to_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> io.StringIO:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    for row in rows:
        writer.writerow(row)
    output.seek(0)
    return output


def to_xlsx(title: str, headers: Sequence[str], rows: Iterable[Sequence]) -> io.BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = title

    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows:
        ws.append(list(row))

    # Ширина колонок
    for column_cells in ws.columns:
        width = max(len(str(c.value or "")) for c in column_cells)
        ws.column_dimensions[column_cells[0].column_letter].width = min(max(width + 2, 8), 40)

    stream = io.BytesIO()
    wb.save(stream)
    stream.seek(0)
    return stream
