"""HIMS GUI shell package.

Headless services live in `hims_gui.services`; Qt widgets in
`hims_gui.components`. Importing this package does not import PyQt6.
"""

__version__ = "0.1.0"
