"""
services/exports.py

관리자용 CSV / Excel(xlsx) 다운로드 응답 생성 헬퍼.

- csv_response  : UTF-8 BOM + StreamingResponse (Excel 에서 악센트 문자 깨짐 방지)
- xlsx_response : openpyxl Workbook → BytesIO → Response

두 함수 모두 header(list) 와 rows(iterable of list) 를 받아
Content-Disposition: attachment 로 파일 다운로드를 유도한다.

"""

import csv
import io
import uuid
from datetime import date, datetime
from typing import Iterable

from openpyxl import Workbook
from starlette.responses import Response, StreamingResponse

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _cell(value):
    # CSV / XLSX 모두 UUID 는 문자열, None 은 빈 칸
    if value is None:
        return ""
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


def csv_response(filename: str, header: list[str], rows: Iterable[list]) -> StreamingResponse:
    def generate():
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(header)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for row in rows:
            writer.writerow([
                v.isoformat() if isinstance(v, (date, datetime)) else _cell(v)
                for v in row
            ])
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=_attachment(filename))


def xlsx_response(filename: str, sheet: str, header: list[str], rows: Iterable[list]) -> Response:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet[:31]

    ws.append(header)
    for row in rows:
        ws.append([_cell(v) for v in row])

    buf = io.BytesIO()
    wb.save(buf)
    return Response(content=buf.getvalue(), media_type=XLSX_MEDIA_TYPE, headers=_attachment(filename))
