from __future__ import annotations

from fastapi import Request

from choseong_finder.services.sheet_source import SheetSource
from choseong_finder.session.search_session import SearchSession


def get_search_session(request: Request) -> SearchSession:
    return request.app.state.search_session


def get_sheet_source(request: Request) -> SheetSource:
    return request.app.state.sheet_source
