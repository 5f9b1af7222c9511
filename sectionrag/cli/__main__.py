"""Allow ``python -m sectionrag.cli`` execution."""

from sectionrag.cli.main import main

main()
