"""blogctl: build-time content tooling for an MDX blog."""

__version__ = "0.3.0"
