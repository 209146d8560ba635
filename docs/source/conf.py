# -- Configuration file for the Sphinx documentation builder ------------------

import os
import sys


# -- Make the package importable without installing it ------------------------

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))


# -- Project information ------------------------------------------------------

project = 'typelayout'
copyright = '2021, ZettaScale Technology and others'
author = 'ZettaScale Technology and others'

extlinks = {
    "rich_colors":      ("https://rich.readthedocs.io/en/stable/console.html#color-systems", None),
    "venv":             ("https://docs.python.org/3/tutorial/venv.html", None),
    "py_installing":    ("https://docs.python.org/3/installing/index.html", None)
}


# -- General configuration ----------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.extlinks',
    'sphinx.ext.napoleon',
    'sphinx.ext.intersphinx',
    "sphinx.ext.viewcode"
]
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'

intersphinx_mapping = {'python': ('https://docs.python.org/3', None)}

napoleon_google_docstring = False
napoleon_numpy_docstring = True

exclude_patterns = ['Thumbs.db', '.DS_Store']

html_theme = 'sphinx_rtd_theme'
pygments_style = 'friendly'
