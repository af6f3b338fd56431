#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: CC0-1.0

import os

from importlib.metadata import version as get_version

os.environ["SPHINX_AUTODOC_RELOAD_MODULES"] = "1"

project = "weaklocal"
author = "Ilya Egorov"
copyright = "2025 Ilya Egorov"

release = get_version("weaklocal")
version = ".".join(release.split(".")[:2])

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx_rtd_theme",
]

toc_object_entries = False

autodoc_class_signature = "separated"
autodoc_inherit_docstrings = False
autodoc_preserve_defaults = True
autodoc_default_options = {
    "exclude-members": "__init_subclass__,__class_getitem__,__weakref__",
    "member-order": "bysource",
    "show-inheritance": True,
    "special-members": True,
}

intersphinx_mapping = {
    "eventlet": ("https://eventlet.readthedocs.io/en/stable/", None),
    "gevent": ("https://www.gevent.org/", None),
    "python": ("https://docs.python.org/3", None),
}

html_theme = "sphinx_rtd_theme"
html_theme_options = {}
html_context = {
    "display_github": True,
    "github_user": "x42005e1f",
    "github_repo": "weaklocal",
    "github_version": "main",
    "conf_py_path": "/docs/",
}
