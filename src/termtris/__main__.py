"""Play in the terminal.

Run with: `python -m termtris`
"""

from .run_curses import main


if __name__ == "__main__":
    main()
