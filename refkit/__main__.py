"""Allow running the picker as a module: python -m refkit module:BaseType [filter]."""

import sys

from refkit.runner import main

if __name__ == "__main__":
    sys.exit(main())
