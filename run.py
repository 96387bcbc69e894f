"""Entry point for the choseong-finder service."""

import uvicorn

from choseong_finder.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "choseong_finder.main:app",
        host=settings.host,
        port=settings.port,
        workers=1,
        log_level="info",
    )
