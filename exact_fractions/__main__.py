import sys

from .calculator import main

if __name__ == "__main__":
    sys.exit(main())
