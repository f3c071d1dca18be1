"""Allow ``python -m vendorwalk``."""

from vendorwalk.cli import main

main()
