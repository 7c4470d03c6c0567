#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/prosediff/cli/help.py
"""Version and ``--help-git`` text for the prosediff CLI.

The Git help is written in Markdown. It is rendered with rich when the
output stream is a terminal and rich is installed, and printed as is
otherwise.
"""

import sys
from typing import TextIO

from prosediff import __version__

PROGRAM = "prosediff"
COPYRIGHT_YEARS = "2024-2025"
AUTHOR = "zrajm <zrajm@zrajm.org>"

HELP_GIT = """\
# Using prosediff with Git

If you want to use prosediff with `git add -p` (and `git restore -p` etc.)
you need the following in your `~/.gitconfig`:

```ini
[interactive]
    diffFilter = prosediff
```

If you also want commands like `git show` and `git diff` to show diffs
highlighted in the same way, set the pager as well:

```ini
[core]
    pager = prosediff | less -FRSX
```

The following two commands set both of the above:

```sh
git config --global core.pager 'prosediff | less -FRSX'
git config --global interactive.diffFilter prosediff
```

Keep Git's own colouring turned on. prosediff removes only the colours it
needs to replace; everything else (such as coloured headers) is retained.
"""


def version_text() -> str:
    """Return the ``--version`` message."""
    return (
        f"{PROGRAM} {__version__}\n"
        f"Copyright (C) {COPYRIGHT_YEARS} {AUTHOR}\n"
        "License GPLv2: GNU GPL version 2 <https://gnu.org/licenses/gpl-2.0.html>.\n"
        "This is free software: you are free to change and redistribute it."
    )


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def display_help_git(stream: TextIO | None = None) -> None:
    """Print the Git help to ``stream`` (default: stdout).

    Parameters
    ----------
    stream : TextIO, optional
        Output stream. Rich rendering is used only if it is a terminal.

    """
    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if isatty is not None and isatty() and check_rich_available():
        from rich.console import Console
        from rich.markdown import Markdown

        Console(file=target).print(Markdown(HELP_GIT))
    else:
        print(HELP_GIT, end="", file=target)
