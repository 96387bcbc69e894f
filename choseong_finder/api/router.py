from __future__ import annotations

from fastapi import APIRouter

from choseong_finder.api.system import router as system_router
from choseong_finder.api.input import router as input_router
from choseong_finder.api.search import router as search_router
from choseong_finder.api.filters import router as filters_router
from choseong_finder.api.dataset import router as dataset_router
from choseong_finder.api.history import router as history_router
from choseong_finder.api.register import router as register_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(input_router)
api_router.include_router(search_router)
api_router.include_router(filters_router)
api_router.include_router(dataset_router)
api_router.include_router(history_router)
api_router.include_router(register_router)
