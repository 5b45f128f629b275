"""Allow `python -m buildflow`."""

from .cli import main

if __name__ == "__main__":
    main()
