# shelf/routers/books.py
import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from shelf.errors import LibraryError
from shelf.render import PageView, render_page

log = logging.getLogger(__name__)

router = APIRouter(tags=["books"])


def _templates(request: Request):
    """Use the shared Jinja instance registered in main.py."""
    return request.app.state.templates


def _not_found(request: Request, message: str):
    return _templates(request).TemplateResponse(
        request,
        "not_found.html",
        {"title": "Not found", "message": message},
        status_code=404,
    )


@router.get("/{slug}", response_class=HTMLResponse)
def book_index(slug: str, request: Request):
    library = request.app.state.library
    try:
        title, items = library.get_book_index(slug)
    except LibraryError as e:
        log.info("Book index %s: %s", slug, e)
        return _not_found(request, "Book not found")

    return _templates(request).TemplateResponse(
        request,
        "book_index.html",
        {"title": title, "items": items, "book_slug": slug},
    )


@router.get("/{slug}/{page:path}", response_class=HTMLResponse)
def book_page(slug: str, page: str, request: Request):
    library = request.app.state.library
    try:
        chapter = library.get_chapter_info(slug, page)
    except LibraryError as e:
        log.info("Page %s/%s: %s", slug, page, e)
        return _not_found(request, "Book not found")

    view = PageView(
        title=chapter.book_info.title,
        slug=slug,
        res_path=page,
        prev_page=chapter.prev_page,
        next_page=chapter.next_page,
    )
    return HTMLResponse(render_page(_templates(request).env, view))
