"""LINE Q&A bot answering as Fern and Nannam."""

__version__ = "1.0.0"
