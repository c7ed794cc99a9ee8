# shelf/routers/home.py
import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from shelf.errors import LibraryError

log = logging.getLogger(__name__)

router = APIRouter(tags=["home"])


def _templates(request: Request):
    return request.app.state.templates


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    library = request.app.state.library
    try:
        books = library.list_books()
    except (LibraryError, SQLAlchemyError):
        log.exception("Listing books failed")
        return PlainTextResponse("Error listing books", status_code=500)

    return _templates(request).TemplateResponse(
        request,
        "home.html",
        {"title": "My books", "books": books},
    )
