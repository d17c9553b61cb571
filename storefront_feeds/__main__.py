import sys

from storefront_feeds.cli import main


if __name__ == "__main__":
    sys.exit(main())
