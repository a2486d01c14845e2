"""Allow ``python -m tagview``."""

from tagview.tui.app import main

if __name__ == "__main__":
    main()
