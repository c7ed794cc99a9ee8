# shelf/render.py
"""
Chapter shell page: title, an iframe that loads the chapter from /_/...,
and prev/next links. The chapter itself is never read here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from jinja2 import Environment

FRAME_ID = "page-frame"

# Appended to the frame's body on every load, in this order.
READER_STYLESHEETS = (
    "/assets/modern-normalize.css",
    "/assets/page.css",
)


@dataclass(frozen=True)
class PageView:
    title: str
    slug: str
    res_path: str
    # None means "no such chapter"; "" is a real page identifier
    prev_page: Optional[str] = None
    next_page: Optional[str] = None


@dataclass(frozen=True)
class NavLink:
    rel: str
    href: str
    hotkey: str
    label: str


def frame_src(slug: str, res_path: str) -> str:
    return f"/_/{slug}/{res_path}"


def page_url(slug: str, page: str) -> str:
    return f"/{slug}/{page}"


def nav_links(view: PageView) -> List[NavLink]:
    links = []
    if view.prev_page is not None:
        links.append(NavLink("prev", page_url(view.slug, view.prev_page), "ArrowLeft", "Previous"))
    if view.next_page is not None:
        links.append(NavLink("next prefetch", page_url(view.slug, view.next_page), "ArrowRight", "Next"))
    return links


def page_context(view: PageView) -> Dict[str, Any]:
    return {
        "title": view.title,
        "slug": view.slug,
        "res_path": view.res_path,
        "frame_id": FRAME_ID,
        "frame_src": frame_src(view.slug, view.res_path),
        "nav_links": nav_links(view),
        "stylesheets": list(READER_STYLESHEETS),
    }


def render_page(env: Environment, view: PageView) -> str:
    return env.get_template("page.html").render(page_context(view))
