import sys

from manifest_parser.main import main

if __name__ == "__main__":
    sys.exit(main())
