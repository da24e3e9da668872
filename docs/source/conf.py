import sys
from pathlib import Path

sys.path.insert(0, str(Path("..", "..", "src").resolve()))

project = "covergen"
copyright = "2026, covergen developers"
author = "covergen developers"
release = "v1.0.0"
version = "v1.0.0"

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store", ".venv"]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3/", None),
    "shapely": ("https://shapely.readthedocs.io/en/stable/", None),
    "pyproj": ("https://pyproj4.github.io/pyproj/stable/", None),
}
intersphinx_disabled_domains = ["std"]

templates_path = ["_templates"]

always_document_param_types = True
html_theme = "alabaster"

epub_show_urls = "footnote"
