"""
StrayLink Backend — Jinja2 Templates
======================================

What:  The single Jinja2 environment for server-rendered HTML.
Who:   Share responder (full HTML documents) and map service (popup fragments).

Autoescape is on for every template (Starlette's default), so record values
from the database are HTML-escaped wherever they are interpolated.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
