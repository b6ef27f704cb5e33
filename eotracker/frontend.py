"""Server-rendered executive orders page (search form, sortable headers, pagination)."""

import os
from datetime import date

from fastapi import APIRouter, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from eotracker import session
from eotracker.render import render_table

router = APIRouter(include_in_schema=False)

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
)


def _back_to_table() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def index():
    display = render_table(session.controller.state)
    template = _env.get_template("index.html")
    return HTMLResponse(template.render(display=display, current_year=date.today().year))


@router.post("/search")
async def search(term: str = Form("")):
    session.controller.search(term)
    return _back_to_table()


@router.post("/sort/{field}")
async def sort(field: str):
    session.controller.sort(field)
    return _back_to_table()


@router.post("/page/{page}")
async def paginate(page: int):
    session.controller.paginate(page)
    return _back_to_table()
