# shelf/utils/slug.py


def slugify(value: str) -> str:
    """
    Keep ASCII letters, digits and spaces; lowercase; spaces become hyphens.
    "The Hobbit, 2nd Ed." -> "the-hobbit-2nd-ed"
    """
    if not value:
        return ""
    kept = (c for c in value if (c.isascii() and c.isalnum()) or c == " ")
    return "".join("-" if c == " " else c.lower() for c in kept)


def book_slug(book_id: int, sort_title: str) -> str:
    return f"{book_id}-{slugify(sort_title or '')}"


def extract_id(slug: str) -> int:
    """Parse the leading run of ASCII digits ("12-the-hobbit" -> 12)."""
    digits = []
    for c in slug or "":
        if not ("0" <= c <= "9"):
            break
        digits.append(c)
    if not digits:
        raise ValueError("Invalid ID")
    return int("".join(digits))
