"""bmskeys: keysound maintenance for BMS chart files."""

__version__ = "0.1.0"
