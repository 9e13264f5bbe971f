# Sphinx configuration for the Sentry API reference.
#
# Build with:  sphinx-build -b html docs/source docs/build

import os
import sys

sys.path.insert(0, os.path.abspath("../.."))

import sentry  # noqa: E402

# -- Project information -----------------------------------------------------
project = "Sentry"
copyright = "2026, Sentry Contributors"
author = sentry.__author__
release = sentry.__version__
version = ".".join(release.split(".")[:2])

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
]

root_doc = "index"
exclude_patterns = ["_build"]

autodoc_mock_imports = ["numba"]

# -- Options for HTML output -------------------------------------------------
html_theme = "sphinx_rtd_theme"
html_title = f"Sentry {release}"

# -- Extension configuration -------------------------------------------------
napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
}

autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}
autosummary_generate = False
