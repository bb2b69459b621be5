# Avoid importing heavy modules at import-time; tabs are resolved in ui.nav.
from .layout import setup_page, render_header

__all__ = ["setup_page", "render_header"]
