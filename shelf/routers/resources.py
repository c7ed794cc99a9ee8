# shelf/routers/resources.py
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from shelf.errors import LibraryError

log = logging.getLogger(__name__)

router = APIRouter(tags=["resources"])


@router.get("/_/{slug}/{res_path:path}")
def book_resource(slug: str, res_path: str, request: Request):
    """Raw file from inside the book's EPUB; this is what the reader iframe loads."""
    library = request.app.state.library
    try:
        content_type, content = library.get_resource(slug, res_path)
    except LibraryError as e:
        log.info("Resource %s/%s: %s", slug, res_path, e)
        return PlainTextResponse("Book not found", status_code=404)
    return Response(content=content, media_type=content_type)


@router.get("/covers/{slug}")
def book_cover(slug: str, request: Request):
    library = request.app.state.library
    try:
        content_type, content = library.get_cover(slug)
    except LibraryError as e:
        log.info("Cover %s: %s", slug, e)
        return PlainTextResponse("Cover not found", status_code=404)
    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": "public, max-age=86400"},
    )
