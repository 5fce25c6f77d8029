# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

import os
import sys

# Add the project root to sys.path so Sphinx can import tracking/ and server/
sys.path.insert(0, os.path.abspath("../.."))  # conf.py lives in docs/source

project = 'Intersection Signals'
copyright = '2026, Intersection Signals contributors'
author = 'Intersection Signals contributors'
release = '1.0'

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",    # API pages from the NumPy-style docstrings
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx_rtd_dark_mode",
]

templates_path = ['_templates']
exclude_patterns = []

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"
default_dark_mode = True
html_static_path = ['_static']
