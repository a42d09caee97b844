"""Qt widgets of the HIMS shell (importing this package imports PyQt6)."""
