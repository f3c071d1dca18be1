"""vendorwalk — vendor a Go package's external dependencies and record their revisions."""

__version__ = "0.1.0"
