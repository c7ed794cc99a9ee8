# shelf/errors.py


class LibraryError(Exception):
    """Base class for everything the library layer can raise."""


class InvalidSlug(LibraryError):
    def __init__(self, slug: str):
        super().__init__(f"Invalid book slug: {slug!r}")
        self.slug = slug


class BookNotFound(LibraryError):
    def __init__(self, book_id: int):
        super().__init__(f"No book with id {book_id}")
        self.book_id = book_id


class ResourceNotFound(LibraryError):
    pass


class EpubLoadError(LibraryError):
    pass
