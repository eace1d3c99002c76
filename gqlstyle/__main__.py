"""Allow ``python -m gqlstyle``."""

import sys

from gqlstyle.main import main

if __name__ == "__main__":
    sys.exit(main())
