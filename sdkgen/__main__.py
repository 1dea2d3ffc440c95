"""Entry point: python -m sdkgen CONFIG [CONFIG ...]

Each CONFIG is a .py file exporting ``default`` or ``config`` (one
configuration or a list), or a .json file holding the same.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .core import generate
from .errors import GeneratorError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sdkgen", description=__doc__.splitlines()[0])
    parser.add_argument("configs", nargs="+", metavar="CONFIG", help="config file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        generate(args.configs)
    except GeneratorError as e:
        logging.getLogger("sdkgen").error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
