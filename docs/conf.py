"""Sphinx configuration for the pybedgraph API reference."""

from __future__ import annotations

import sys
from pathlib import Path

# Document the checkout, not whatever pybedgraph happens to be installed.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pybedgraph  # noqa: E402

project = "pybedgraph"
author = "pybedgraph developers"
release = pybedgraph.__version__
version = ".".join(release.split(".")[:2])

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
]

# Every public docstring is numpy style (Parameters / Returns / Raises).
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_rtype = False
napoleon_preprocess_types = True
napoleon_type_aliases = {
    "BedGraphData": "pybedgraph.records.BedGraphData",
    "BedGraphRecord": "pybedgraph.records.BedGraphRecord",
    "Interval": "pybedgraph.records.Interval",
    "array-like": ":term:`array-like <numpy:array_like>`",
}

# Names are re-exported from pybedgraph/__init__.py; document them where
# they are defined and in source order.
autodoc_default_options = {
    "members": True,
    "undoc-members": False,
    "imported-members": False,
    "exclude-members": "__weakref__",
}
autodoc_member_order = "bysource"
autodoc_typehints = "description"

myst_enable_extensions = ["colon_fence"]
source_suffix = {".md": "markdown"}

root_doc = "index"
exclude_patterns = ["_build"]

html_theme = "furo"
html_title = f"pybedgraph {release}"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "pandas": ("https://pandas.pydata.org/docs/", None),
}
