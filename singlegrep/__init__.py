"""Single Grep: regex-driven tabular extraction from a folder of text files."""

__version__ = "1.3.0"
