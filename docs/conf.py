# Sphinx configuration for the gh-labeler API reference

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

from gh_labeler import __version__  # noqa: E402

project = 'gh-labeler'
copyright = '2026, gh-labeler contributors'
author = 'gh-labeler contributors'
release = __version__
version = '.'.join(__version__.split('.')[:2])

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

root_doc = 'index'
exclude_patterns = ['_build']

html_theme = 'sphinx_rtd_theme'

# Models and operations are documented field by field
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'undoc-members': True,
    'show-inheritance': True,
}
autodoc_typehints = 'description'

napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
    'requests': ('https://requests.readthedocs.io/en/latest', None),
}
