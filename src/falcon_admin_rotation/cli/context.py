"""Per-invocation CLI state."""
from dataclasses import dataclass
from typing import Any, Optional

from rich.console import Console


@dataclass
class CliContext:
    """State shared by the rotate and generate commands.

    Attributes:
        console: Rich console for status messages (stderr for json/csv output)
        verbose: Print progress detail
        json_output_mode: Errors are reported as JSON objects
        config: Configuration with defaults applied, set by setup_environment
        falcon: Authenticated APIHarnessV2, set by setup_environment
    """
    console: Console
    verbose: bool = False
    json_output_mode: bool = False
    config: Optional[dict] = None
    falcon: Optional[Any] = None

    def log_verbose(self, message: str):
        if self.verbose and not self.json_output_mode:
            self.console.print(f"[dim]{message}[/dim]")
