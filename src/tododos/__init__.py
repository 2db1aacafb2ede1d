# src/tododos/__init__.py

"""tododos - terminal task list editor with optional Google Sheets mirroring."""

__version__ = "0.1.0"
