"""Sphinx configuration for Contact Management API documentation."""

import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath(".."))

project = "Contact Management API"
current_year = datetime.now().year
copyright = f"{current_year}, Contact Management"
author = "Contact Management Team"

master_doc = "index"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
]


templates_path: list[str] = []
exclude_patterns: list[str] = []

html_theme = "alabaster"

html_static_path: list[str] = []
