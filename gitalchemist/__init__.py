"""Build example git repositories step by step from YAML formulas."""

__version__ = "0.1.0"