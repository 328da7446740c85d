from __future__ import annotations
from typing import Optional

from errors import QuitRequested
from moves import is_quit


class Console:
    """Line-oriented terminal I/O. The only place that calls input()/print()."""

    def read_line(self, prompt: str = "") -> Optional[str]:
        """One line of input, or None at end of input."""
        try:
            return input(prompt)
        except EOFError:
            return None

    def write(self, text: str = "") -> None:
        print(text)

    def ask(self, prompt: str) -> str:
        """
        Read a stripped line. End of input and quit words raise QuitRequested,
        so every prompt honours 'quit'.
        """
        line = self.read_line(prompt)
        if line is None or is_quit(line):
            raise QuitRequested()
        return line.strip()
