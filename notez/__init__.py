"""notez: personal notes with a small search query language."""

__version__ = "0.3.0"
