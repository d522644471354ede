"""Package entry point for ``python -m clip_captions``."""

import sys

from clip_captions.cli import main

if __name__ == "__main__":
    sys.exit(main())
