import sys

from pyramid_orbit.cli import main


if __name__ == "__main__":
    sys.exit(main())
