"""Custom exceptions for vendorwalk."""


class VendorError(Exception):
    """Base exception for all vendoring errors."""


class ResolverError(VendorError):
    """Raised when the package metadata resolver cannot be run or parsed."""


class CopyError(VendorError):
    """Raised when a package's files cannot be copied into the vendor tree."""

    def __init__(self, import_path: str, reason: str):
        self.import_path = import_path
        self.reason = reason
        super().__init__(f"error copying package {import_path}: {reason}")


class RevisionError(VendorError):
    """Raised when a source revision cannot be determined for a directory."""
