"""Campus Board messaging and interest-expression service."""

__version__ = "0.1.0"
