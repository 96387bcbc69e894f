from __future__ import annotations

from fastapi import APIRouter, Depends

from choseong_finder.api.deps import get_search_session
from choseong_finder.schemas.search import InputEvent, InputResponse
from choseong_finder.session.search_session import SearchSession

router = APIRouter(prefix="/input", tags=["input"])


def _input_state(search_session: SearchSession) -> InputResponse:
    state = search_session.state
    return InputResponse(
        buffer=state.buffer,
        transliterated=state.transliterated,
        phase=state.phase,
    )


@router.post(
    "",
    response_model=InputResponse,
    summary="입력 변경",
    description="입력창 값이 바뀔 때마다 호출합니다 (IME 조합 중 포함). "
                "초성으로 보정된 입력값을 돌려주며, 검색은 짧은 디바운스 후 실행됩니다.",
)
async def text_changed(
    event: InputEvent,
    search_session: SearchSession = Depends(get_search_session),
):
    search_session.controller.text_changed(event.value, event.phase)
    return _input_state(search_session)


@router.post("/composition/start", response_model=InputResponse, summary="IME 조합 시작")
async def composition_start(search_session: SearchSession = Depends(get_search_session)):
    search_session.controller.composition_start()
    return _input_state(search_session)


@router.post("/composition/end", response_model=InputResponse, summary="IME 조합 종료")
async def composition_end(
    event: InputEvent,
    search_session: SearchSession = Depends(get_search_session),
):
    search_session.controller.composition_end(event.value)
    return _input_state(search_session)


@router.post("/submit", response_model=InputResponse, summary="즉시 검색 (Enter)")
async def submit(search_session: SearchSession = Depends(get_search_session)):
    search_session.controller.submit()
    return _input_state(search_session)


@router.post("/clear", response_model=InputResponse, summary="입력 지우기")
async def clear(search_session: SearchSession = Depends(get_search_session)):
    search_session.controller.clear()
    return _input_state(search_session)
