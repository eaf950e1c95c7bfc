import sys

from sceneopts import main


if __name__ == '__main__':
    sys.exit(main())
