"""Dark theme configuration for the web menu."""

from __future__ import annotations

COLORS = {
    "bg_primary": "#0d1117",
    "bg_secondary": "#161b22",
    "border": "#30363d",
    "text_primary": "#e6edf3",
    "text_secondary": "#8b949e",
    "text_muted": "#484f58",
    "accent_blue": "#58a6ff",
    "accent_green": "#3fb950",
    "accent_red": "#f85149",
}

CSS = """
body {
    background-color: #0d1117 !important;
    color: #e6edf3 !important;
    font-family: 'JetBrains Mono', 'Fira Code', monospace !important;
}
.q-menu {
    background-color: #161b22 !important;
    border: 1px solid #30363d !important;
}
"""
