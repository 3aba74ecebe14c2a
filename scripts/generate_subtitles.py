import sys

from subtitle_batch.cli import main


if __name__ == "__main__":
    sys.exit(main())
