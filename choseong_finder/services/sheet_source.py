"""공개 스프레드시트(CSV) 데이터 수집.

시트 열 구성: 카테고리, 태그(선택, 셀 안에서 쉼표 구분), 이름.
열이 두 개뿐이면 카테고리, 이름으로 본다.
"""

from __future__ import annotations

import csv
import io
import logging
import time
from typing import Any

import httpx

from choseong_finder.config import settings

logger = logging.getLogger(__name__)

_HEADER_MARKER = "카테고리"


class DatasetUnavailableError(Exception):
    """데이터셋을 가져올 수 없음."""


def parse_sheet_csv(text: str) -> list[dict[str, Any]]:
    """CSV 본문을 원시 레코드 목록으로 변환한다. 검증은 Dataset이 담당한다."""
    rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if rows and any(_HEADER_MARKER in cell for cell in rows[0]):
        rows = rows[1:]

    records: list[dict[str, Any]] = []
    for row in rows:
        if len(row) < 2:
            continue
        tags: list[str] = []
        if len(row) >= 3 and row[1].strip():
            tags = [t.strip() for t in row[1].split(",") if t.strip()]
        name = row[2] if len(row) >= 3 else row[1]
        records.append({
            "category": row[0].strip(),
            "tags": tags,
            "name": name.strip(),
        })
    return records


class SheetSource:
    """시트 CSV를 내려받아 레코드로 변환한다."""

    def __init__(
        self,
        url: str = settings.sheet_url,
        timeout: float = settings.http_timeout,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch_records(self) -> list[dict[str, Any]]:
        # 캐시 버스터 (기존 쿼리 파라미터 유지)
        url = httpx.URL(self.url).copy_merge_params({"t": str(int(time.time() * 1000))})
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, follow_redirects=True
            ) as client:
                resp = await client.get(url, headers={"Cache-Control": "no-cache"})
                resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("데이터 로딩 실패: %s", e)
            raise DatasetUnavailableError("데이터를 불러올 수 없습니다.") from e

        records = parse_sheet_csv(resp.text)
        logger.info("시트 레코드 %d건 수신", len(records))
        return records
