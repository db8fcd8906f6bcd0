"""Small command-line tools: a counter, a todo manager and a markdown previewer."""

__version__ = "0.1.0"
