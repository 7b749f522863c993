import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.viewcode',
    'sphinx.ext.napoleon',
    'numpydoc',
    'sphinx_autodoc_typehints',
]

html_theme = 'sphinx_rtd_theme'
numpydoc_show_class_members = False
autodoc_mock_imports = ['pyreadstat']

# -- Project information -----------------------------------------------------

project = 'surveyviz'
copyright = '2026, surveyviz contributors'
author = 'surveyviz contributors'
release = '0.1.0'

# -- General configuration ---------------------------------------------------

templates_path = ['_templates']
exclude_patterns = []

# -- Options for HTML output -------------------------------------------------

html_static_path = ['_static']
