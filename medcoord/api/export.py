# medcoord/api/export.py
from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, StreamingResponse
from sqlalchemy.orm import Session

from medcoord.db import get_db, utcnow
from medcoord.deps import get_current_user
from medcoord.models.users import User
from medcoord.schemas.requests import RequestDetail
from medcoord.schemas.stocks import StockWithResource
from medcoord.services import export_service
from medcoord.services.request_lifecycle import RequestLifecycleService
from medcoord.services.stock_ledger import StockLedgerService

router = APIRouter(
    prefix="/api/export",
    tags=["Export"],
)

FORMAT_PATTERN = "^(" + "|".join(export_service.EXPORT_FORMATS) + ")$"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _file_response(name: str, fmt: str, headers, rows, title: str):
    stamp = utcnow().strftime("%Y%m%d_%H%M")
    if fmt == "xlsx":
        stream = export_service.to_xlsx(title, headers, rows)
        media_type = XLSX_MEDIA_TYPE
    else:
        stream = export_service.to_csv(headers, rows)
        media_type = "text/csv"

    filename = f"{name}_{stamp}.{fmt}"
    return StreamingResponse(
        stream,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _json_response(schema, items):
    data = [schema.model_validate(i).model_dump(by_alias=True) for i in items]
    return JSONResponse(content=jsonable_encoder(data))


@router.get("/stocks")
def api_export_stocks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    format: str = Query("csv", pattern=FORMAT_PATTERN),
):
    if format == "json":
        return _json_response(StockWithResource, StockLedgerService.list_stocks(db))
    return _file_response(
        "stocks", format, export_service.STOCK_HEADERS, export_service.stock_rows(db), "Stocks"
    )


@router.get("/requests")
def api_export_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    format: str = Query("csv", pattern=FORMAT_PATTERN),
):
    if format == "json":
        return _json_response(RequestDetail, RequestLifecycleService.list_requests(db))
    return _file_response(
        "requests", format, export_service.REQUEST_HEADERS, export_service.request_rows(db), "Requests"
    )
