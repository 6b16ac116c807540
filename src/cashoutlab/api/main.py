"""CLI entrypoint to run the CashoutLab FastAPI server."""

from __future__ import annotations

import logging

import uvicorn

from cashoutlab.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("cashoutlab.api.server:app", host="0.0.0.0", port=settings.port, reload=False)


if __name__ == "__main__":  # pragma: no cover
    main()
