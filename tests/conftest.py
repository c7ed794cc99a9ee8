"""Pytest configuration and shared fixtures: a small Calibre library on disk."""

import pytest
from ebooklib import epub
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from shelf.db.base import Base
from shelf.db.session import make_engine, make_session_factory
from shelf.library import Library
from shelf.main import create_app
from shelf.models.book import CalibreBook

HOBBIT_DIR = "J. R. R. Tolkien/The Hobbit (1)"
EMPTY_DIR = "Nobody/Empty Book (2)"
MISSING_DIR = "Nobody/Gone (3)"
SILMARILLION_DIR = "J. R. R. Tolkien/The Silmarillion (4)"

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"


def write_epub(path, title, chapter_names):
    """Write a small EPUB: one xhtml per chapter, a stylesheet, and a nested toc."""
    book = epub.EpubBook()
    book.set_identifier(f"id-{title.lower().replace(' ', '-')}")
    book.set_title(title)
    book.set_language("en")

    chapters = []
    for n, name in enumerate(chapter_names, 1):
        ch = epub.EpubHtml(title=f"Chapter {name}", file_name=f"text/ch{n}.xhtml", lang="en")
        ch.content = f"<h1>Chapter {name}</h1><p>Body of chapter {n}.</p>"
        book.add_item(ch)
        chapters.append(ch)

    book.add_item(
        epub.EpubItem(
            uid="style_main",
            file_name="style/main.css",
            media_type="text/css",
            content=b"body { color: black; }",
        )
    )

    first, rest = chapters[0], chapters[1:]
    toc = [epub.Link(first.file_name, first.title, "toc-ch1")]
    if rest:
        toc.append((epub.Section("Part Two", href=rest[0].file_name), rest))
    book.toc = toc

    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = chapters

    path.parent.mkdir(parents=True, exist_ok=True)
    epub.write_epub(str(path), book)


@pytest.fixture
def library_dir(tmp_path):
    root = tmp_path / "Calibre Library"
    root.mkdir()

    hobbit = root / HOBBIT_DIR
    write_epub(hobbit / "The Hobbit - J. R. R. Tolkien.epub", "The Hobbit", ["One", "Two", "Three"])
    (hobbit / "cover.jpg").write_bytes(JPEG_BYTES)

    (root / EMPTY_DIR).mkdir(parents=True)

    write_epub(
        root / SILMARILLION_DIR / "The Silmarillion - J. R. R. Tolkien.epub",
        "The Silmarillion",
        ["Ainulindale", "Valaquenta"],
    )

    engine = create_engine(f"sqlite:///{root / 'metadata.db'}")
    Base.metadata.create_all(engine)
    with Session(engine) as db:
        db.add_all(
            [
                CalibreBook(
                    id=1,
                    title="The Hobbit",
                    sort="Hobbit, The",
                    author_sort="Tolkien, J. R. R.",
                    pubdate="1937-09-21 00:00:00+00:00",
                    path=HOBBIT_DIR,
                    has_cover=True,
                ),
                CalibreBook(
                    id=2,
                    title="Empty Book",
                    sort="Empty Book",
                    author_sort="Nobody",
                    pubdate=None,
                    path=EMPTY_DIR,
                    has_cover=False,
                ),
                CalibreBook(
                    id=3,
                    title="Gone",
                    sort="Gone",
                    author_sort="Nobody",
                    pubdate="2001-01-01 00:00:00+00:00",
                    path=MISSING_DIR,
                    has_cover=False,
                ),
                CalibreBook(
                    id=4,
                    title="The Silmarillion",
                    sort="Silmarillion, The",
                    author_sort="Tolkien, J. R. R.",
                    pubdate="1977-09-15 00:00:00+00:00",
                    path=SILMARILLION_DIR,
                    has_cover=False,
                ),
            ]
        )
        db.commit()
    engine.dispose()
    return root


@pytest.fixture
def library(library_dir):
    engine = make_engine(library_dir / "metadata.db")
    yield Library(library_dir, make_session_factory(engine))
    engine.dispose()


@pytest.fixture
def app(library_dir):
    return create_app(str(library_dir))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
