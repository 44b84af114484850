import sys

from mipspro_suppress.cli import WRAPPER_NAME, main


if __name__ == "__main__":
    raise SystemExit(main([WRAPPER_NAME, *sys.argv[1:]]))
