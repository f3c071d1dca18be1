"""Vendoring engine — resolve, classify, copy and record Go packages."""

from vendorwalk.engine.classifier import classify
from vendorwalk.engine.models import Category, PackageDescriptor, WalkResult
from vendorwalk.engine.walker import GraphWalker, RunContext, vendor

__all__ = [
    "Category",
    "GraphWalker",
    "PackageDescriptor",
    "RunContext",
    "WalkResult",
    "classify",
    "vendor",
]
