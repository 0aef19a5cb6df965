"""
kb/api.py — HTTP front of the knowledge base.

Routes:
  GET  /?action=...&...   → lookup (query string)
  POST /                  → lookup (form fields)

Language support:
  The Accept-Language header decides the language fallback chain.
  Without the header, English is assumed.

200 answers are JSON-LD; every other status carries an HTML fragment.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Header, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from kb.config import settings
from kb.dispatcher import handle

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.API_TITLE)


def to_response(status: int, payload) -> Response:
    if status == 200:
        return JSONResponse(payload)
    return HTMLResponse(payload, status_code=status)


@app.get("/", summary="Knowledge-base lookup")
def lookup(
    request: Request,
    accept_language: Optional[str] = Header(None, alias="Accept-Language"),
):
    params = dict(request.query_params)
    status, payload = handle(params, accept_language, db_path=settings.DATABASE_PATH)
    return to_response(status, payload)


@app.post("/", summary="Knowledge-base lookup (form)")
async def lookup_form(
    request: Request,
    accept_language: Optional[str] = Header(None, alias="Accept-Language"),
):
    form = await request.form()
    params = {**dict(request.query_params), **{k: str(v) for k, v in form.items()}}
    status, payload = handle(params, accept_language, db_path=settings.DATABASE_PATH)
    return to_response(status, payload)
