import sys

from .cli.admin_management import main


if __name__ == "__main__":
    sys.exit(main())
