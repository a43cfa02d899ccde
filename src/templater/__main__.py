"""Allow ``python -m templater``."""

from templater.ui.cli import main


if __name__ == "__main__":
    main()
