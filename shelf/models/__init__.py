from shelf.models.book import CalibreBook  # noqa: F401
