"""Tax Compare CLI package."""
