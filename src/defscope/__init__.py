"""Copy code together with the definitions that enclose it."""

__version__ = "0.1.0"
