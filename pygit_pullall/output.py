"""Output handler and progress implementations: console, null, tqdm."""

from __future__ import annotations

from colorama import Fore, Style
from tqdm import tqdm

SECTION_WIDTH = 50

# Resolution of the progress bar; fractions are mapped onto this many ticks
PROGRESS_TICKS = 1000


class ConsoleOutputHandler:
    """Console output with colors."""

    def __init__(self, verbose: bool = False):
        """Create a console handler. Set verbose=True to enable debug output."""
        self.verbose = verbose

    def info(self, message: str, indent: int = 0) -> None:
        """Print an informational message."""
        tqdm.write("  " * indent + message)

    def success(self, message: str, indent: int = 0) -> None:
        """Print a green success message."""
        tqdm.write("  " * indent + f"{Fore.GREEN}{message}{Style.RESET_ALL}")

    def warning(self, message: str, indent: int = 0) -> None:
        """Print a yellow warning message."""
        tqdm.write("  " * indent + f"{Fore.YELLOW}{message}{Style.RESET_ALL}")

    def error(self, message: str, indent: int = 0) -> None:
        """Print a red error message."""
        tqdm.write("  " * indent + f"{Fore.RED}{message}{Style.RESET_ALL}")

    def section(self, title: str) -> None:
        """Print a section header with a divider line."""
        tqdm.write("")
        tqdm.write(title)
        tqdm.write("-" * SECTION_WIDTH)

    def debug(self, message: str) -> None:
        """Print a cyan debug message (only when verbose is enabled)."""
        if self.verbose:
            tqdm.write(f"{Fore.CYAN}[DEBUG] {message}{Style.RESET_ALL}")


class NullOutputHandler:
    """Silent output handler for testing and JSON mode."""

    def info(self, message: str, indent: int = 0) -> None:
        pass

    def success(self, message: str, indent: int = 0) -> None:
        pass

    def warning(self, message: str, indent: int = 0) -> None:
        pass

    def error(self, message: str, indent: int = 0) -> None:
        pass

    def section(self, title: str) -> None:
        pass

    def debug(self, message: str) -> None:
        pass


class TqdmProgress:
    """Single progress bar driven by a run-wide fraction."""

    def __init__(self, desc: str = "Fetch & Pull", disable: bool = False):
        self._bar = tqdm(
            total=PROGRESS_TICKS,
            desc=desc,
            disable=disable,
            bar_format="{desc}: {percentage:3.0f}%|{bar}| {postfix}",
        )

    def update(self, label: str, fraction: float) -> None:
        """Move the bar to fraction and show label next to it."""
        self._bar.n = round(fraction * PROGRESS_TICKS)
        self._bar.set_postfix_str(label, refresh=False)
        self._bar.refresh()

    def close(self) -> None:
        self._bar.close()


class NullProgress:
    """Progress sink that ignores updates."""

    def update(self, label: str, fraction: float) -> None:
        pass

    def close(self) -> None:
        pass
