"""Allow ``python -m create_express_mongo``."""

from .cli import main

main()
