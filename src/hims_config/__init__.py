"""Environment-backed configuration for the HIMS GUI shell."""
