# shelf/config.py
import os

from dotenv import load_dotenv

# ---- Load env (.env) ----
load_dotenv()

CALIBRE_LIBRARY = os.getenv("CALIBRE_LIBRARY", "")
EPUB_CACHE_SIZE = int(os.getenv("EPUB_CACHE_SIZE", "5"))

SHELF_HOST = os.getenv("SHELF_HOST", "127.0.0.1")
SHELF_PORT = int(os.getenv("SHELF_PORT", "8007"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATES_DIR = os.path.join(PACKAGE_DIR, "templates")
ASSETS_DIR = os.path.join(PACKAGE_DIR, "static", "assets")
