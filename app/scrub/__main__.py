"""Allow ``python -m scrub``."""

from scrub.cli.main import main

main()
