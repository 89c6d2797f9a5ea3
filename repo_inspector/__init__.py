"""repo-inspector: discover and classify repository files for documentation bundles."""

__version__ = "0.1.0"
