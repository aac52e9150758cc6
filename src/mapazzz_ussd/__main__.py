"""Arranque local: `python -m mapazzz_ussd`."""

from __future__ import annotations

import uvicorn

from mapazzz_ussd.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "mapazzz_ussd.api.app:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
