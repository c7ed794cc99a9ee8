# shelf/models/book.py
from sqlalchemy import Boolean, Column, Integer, String, Text

from shelf.db.base import Base


class CalibreBook(Base):
    """The subset of Calibre's `books` table we read."""

    __tablename__ = "books"

    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False, default="Unknown")
    # Title as Calibre sorts it, e.g. "Hobbit, The"
    sort = Column(Text, nullable=True)
    author_sort = Column(Text, nullable=True)
    # Stored by Calibre as "YYYY-MM-DD HH:MM:SS+00:00" text
    pubdate = Column(String, nullable=True)
    # Book directory, relative to the library root
    path = Column(Text, nullable=False, default="")
    has_cover = Column(Boolean, default=False)
