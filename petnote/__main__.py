"""Allow ``python -m petnote``."""

from petnote.interfaces.cli.main import main

main()
