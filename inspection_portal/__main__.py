"""Run the API with uvicorn."""
from __future__ import annotations

import os

import uvicorn


def main() -> None:
    host = os.getenv("PORTAL_HOST", "0.0.0.0")
    port = int(os.getenv("PORTAL_PORT", "8000"))
    uvicorn.run("inspection_portal.app:app", host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
