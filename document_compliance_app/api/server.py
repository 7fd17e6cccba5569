"""ASGI entry point: ``uvicorn document_compliance_app.api.server:app``.

Importing this module loads the configured catalog; a broken catalog fails
here, at startup.
"""
# document_compliance_app/api/server.py
from .app import create_app

app = create_app()
