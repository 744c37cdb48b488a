"""WSGI entry point (``gunicorn dalgona.wsgi:app``)."""

from __future__ import annotations

from dalgona.factory import create_app

app = create_app()
