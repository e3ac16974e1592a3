"""Training log API: menus, logged sessions and training analytics."""

__version__ = "0.1.0"
