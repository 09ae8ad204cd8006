"""
Top-level package for the FMCSA viewer.

This package exposes the view-state engine (core), persistence (services)
and the Dash UI. Most code should import from submodules such as:
    fmcsa_viewer.core
    fmcsa_viewer.services
    fmcsa_viewer.ui
"""

__all__: list[str] = []
