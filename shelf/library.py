# shelf/library.py
from __future__ import annotations

import logging
import mimetypes
import threading
import zipfile
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from ebooklib import epub
from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from shelf.errors import (
    BookNotFound,
    EpubLoadError,
    InvalidSlug,
    ResourceNotFound,
)
from shelf.models.book import CalibreBook
from shelf.utils.slug import book_slug, extract_id

log = logging.getLogger(__name__)

COVER_FILES = (
    ("cover.jpg", "image/jpeg"),
    ("cover.png", "image/png"),
)


@dataclass(frozen=True)
class Book:
    id: int
    slug: str
    title: str
    authors: str
    year: str
    has_cover: bool


@dataclass(frozen=True)
class BookInfo:
    id: int
    # Book directory inside the Calibre library, not the epub itself
    path: Path
    title: str


@dataclass(frozen=True)
class IndexItem:
    label: str
    path: str
    level: int


@dataclass(frozen=True)
class ChapterInfo:
    book_info: BookInfo
    prev_page: Optional[str]
    next_page: Optional[str]


class Library:
    """
    Read-only view over a Calibre library: metadata from metadata.db,
    content from each book's EPUB. Parsed EPUBs are kept in a small LRU.
    """

    def __init__(self, base_path: Path, session_factory: sessionmaker, cache_size: int = 5):
        self.base_path = Path(base_path)
        self._session_factory = session_factory
        self._cache_size = max(1, cache_size)
        self._cache: "OrderedDict[int, epub.EpubBook]" = OrderedDict()
        self._cache_lock = threading.Lock()

    # ---------- metadata ----------
    def list_books(self) -> List[Book]:
        with self._session_factory() as db:
            rows = (
                db.query(
                    CalibreBook.id,
                    CalibreBook.title,
                    CalibreBook.author_sort,
                    func.strftime("%Y", CalibreBook.pubdate).label("year"),
                    CalibreBook.sort,
                    CalibreBook.has_cover,
                )
                .order_by(CalibreBook.id)
                .all()
            )
        return [
            Book(
                id=row.id,
                slug=book_slug(row.id, row.sort or row.title),
                title=row.title,
                authors=row.author_sort or "",
                year=row.year or "",
                has_cover=bool(row.has_cover),
            )
            for row in rows
        ]

    def get_book_info(self, slug: str) -> BookInfo:
        try:
            book_id = extract_id(slug)
        except ValueError:
            raise InvalidSlug(slug) from None

        with self._session_factory() as db:
            row = (
                db.query(CalibreBook.title, CalibreBook.path)
                .filter(CalibreBook.id == book_id)
                .first()
            )
        if row is None:
            raise BookNotFound(book_id)
        return BookInfo(id=book_id, path=self.base_path / row.path, title=row.title)

    # ---------- content ----------
    def get_book_index(self, slug: str) -> Tuple[str, List[IndexItem]]:
        """Book title plus its table of contents, flattened depth-first."""
        info = self.get_book_info(slug)
        doc = self._get_epub_doc(info)
        return info.title, list(_flatten_toc(doc.toc))

    def get_chapter_info(self, slug: str, res_path: str) -> ChapterInfo:
        info = self.get_book_info(slug)
        doc = self._get_epub_doc(info)
        pages = _spine_pages(doc)

        prev_page = next_page = None
        if res_path in pages:
            pos = pages.index(res_path)
            if pos > 0:
                prev_page = pages[pos - 1]
            if pos + 1 < len(pages):
                next_page = pages[pos + 1]
        return ChapterInfo(book_info=info, prev_page=prev_page, next_page=next_page)

    def get_resource(self, slug: str, res_path: str) -> Tuple[str, bytes]:
        """Any file packed in the book's EPUB, as (mime type, bytes)."""
        info = self.get_book_info(slug)
        doc = self._get_epub_doc(info)
        item = doc.get_item_with_href(res_path)
        if item is None:
            raise ResourceNotFound(f"{res_path} not in book {info.id}")

        mime = item.media_type or mimetypes.guess_type(res_path)[0] or "application/octet-stream"
        # .content is what was read from the archive; get_content() re-renders xhtml
        return mime, item.content

    def get_cover(self, slug: str) -> Tuple[str, bytes]:
        info = self.get_book_info(slug)
        for name, mime in COVER_FILES:
            cover = info.path / name
            if cover.is_file():
                return mime, cover.read_bytes()
        raise ResourceNotFound(f"No cover for book {info.id}")

    # ---------- epub cache ----------
    def _get_epub_doc(self, info: BookInfo) -> epub.EpubBook:
        with self._cache_lock:
            doc = self._cache.get(info.id)
            if doc is not None:
                self._cache.move_to_end(info.id)
                return doc

            doc = self._load_epub_doc(info.path)
            self._cache[info.id] = doc
            if len(self._cache) > self._cache_size:
                evicted, _ = self._cache.popitem(last=False)
                log.debug("Evicted book %s from epub cache", evicted)
            return doc

    def _load_epub_doc(self, path: Path) -> epub.EpubBook:
        try:
            candidates = sorted(p for p in path.iterdir() if p.suffix.lower() == ".epub")
        except OSError as e:
            raise EpubLoadError(f"Cannot read book directory {path}: {e}") from e
        if not candidates:
            raise ResourceNotFound(f"No epub in {path}")

        epub_path = candidates[0]
        log.info("Loading %s", epub_path)
        try:
            return epub.read_epub(str(epub_path))
        except (epub.EpubException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise EpubLoadError(f"Cannot parse {epub_path}: {e}") from e


def _flatten_toc(entries: Iterable, level: int = 1) -> Iterator[IndexItem]:
    for entry in entries:
        if isinstance(entry, (tuple, list)):
            section, children = entry[0], entry[1]
            yield IndexItem(
                label=getattr(section, "title", "") or "",
                path=getattr(section, "href", "") or "",
                level=level,
            )
            yield from _flatten_toc(children, level + 1)
        elif isinstance(entry, epub.EpubHtml):
            yield IndexItem(label=entry.title or "", path=entry.get_name(), level=level)
        else:
            yield IndexItem(
                label=getattr(entry, "title", "") or "",
                path=getattr(entry, "href", "") or "",
                level=level,
            )


def _spine_pages(doc: epub.EpubBook) -> List[str]:
    """Names of the spine documents, in reading order."""
    pages = []
    for entry in doc.spine:
        idref = entry[0] if isinstance(entry, (tuple, list)) else entry
        item = doc.get_item_with_id(idref)
        if item is not None:
            pages.append(item.get_name())
    return pages
