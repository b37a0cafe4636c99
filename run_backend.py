#!/usr/bin/env python
"""Script to run the task API server."""
import uvicorn

from taskboard.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "taskboard.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
