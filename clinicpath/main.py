"""Application entry point for the ClinicPath wayfinding API.

Run locally:
    uvicorn clinicpath.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import os

import uvicorn

from clinicpath.api import create_app

app = create_app()


if __name__ == "__main__":
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    reload_enabled = os.getenv("API_RELOAD", "true").lower() == "true"
    uvicorn.run("clinicpath.main:app", host=host, port=port, reload=reload_enabled)
