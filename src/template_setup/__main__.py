import sys

from src.template_setup.cli import main

if __name__ == "__main__":
    sys.exit(main())
