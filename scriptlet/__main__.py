import sys

from scriptlet.main import main


if __name__ == "__main__":
    sys.exit(main())
