"""Output strategies for rotation outcomes.

Every strategy consumes outcomes as the pipeline yields them and writes each
record immediately, so a long batch can be followed while it runs.
"""
from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, Iterable, TextIO
import csv
import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from falcon_admin_rotation.rotation.results import RotationOutcome, RotationStatus
from falcon_admin_rotation.utils.constants import Style

CSV_HEADERS = ['Host', 'Account', 'Password', 'Status', 'Reason', 'Timestamp']

STATUS_STYLES = {
    RotationStatus.SUCCESSFUL: Style.GREEN,
    RotationStatus.PASSWORD_SET_FAILED: Style.RED,
    RotationStatus.NETWORK_CONNECTION_FAILED: Style.YELLOW,
}


class OutputStrategy(ABC):
    """Abstract base class for output strategies."""

    @abstractmethod
    def output(self, outcomes: Iterable[RotationOutcome], context, stream: TextIO) -> Dict[str, int]:
        """Write outcomes in a specific format.

        Args:
            outcomes: Outcomes, consumed lazily
            context: CLI context
            stream: Destination for the formatted records

        Returns:
            Count of outcomes per status value
        """


class TextOutputStrategy(OutputStrategy):
    """Strategy for console output: one line per host, then a summary table."""

    def output(self, outcomes, context, stream) -> Dict[str, int]:
        console = context.console if stream is None else Console(file=stream)
        counts = Counter()

        for outcome in outcomes:
            counts[outcome.status.value] += 1
            style = STATUS_STYLES.get(outcome.status, Style.DIM)
            line = f"[{Style.BOLD}]{escape(outcome.host)}[/{Style.BOLD}] {escape(outcome.account)} [{style}]{outcome.status.value}[/{style}]"
            if outcome.succeeded:
                line += f"  {escape(outcome.password)}"
            elif outcome.reason:
                line += f" [{Style.DIM}]({outcome.reason.value}: {escape(outcome.error or '')})[/{Style.DIM}]"
            console.print(line, markup=True, highlight=False)

        console.print(self._build_summary_table(counts))
        return dict(counts)

    @staticmethod
    def _build_summary_table(counts: Counter) -> Table:
        table = Table(title="Rotation Summary")
        table.add_column("Status", style=Style.BOLD)
        table.add_column("Hosts", justify="right")
        for status in RotationStatus:
            style = STATUS_STYLES[status]
            table.add_row(f"[{style}]{status.value}[/{style}]", str(counts.get(status.value, 0)))
        table.add_row("Total", str(sum(counts.values())))
        return table


class JsonOutputStrategy(OutputStrategy):
    """Strategy for JSON output, one object per line."""

    def output(self, outcomes, context, stream) -> Dict[str, int]:
        counts = Counter()
        for outcome in outcomes:
            counts[outcome.status.value] += 1
            stream.write(json.dumps(outcome.to_dict()) + '\n')
            stream.flush()
        return dict(counts)


class CsvOutputStrategy(OutputStrategy):
    """Strategy for CSV output."""

    def output(self, outcomes, context, stream) -> Dict[str, int]:
        counts = Counter()
        writer = csv.writer(stream)
        writer.writerow(CSV_HEADERS)

        for outcome in outcomes:
            counts[outcome.status.value] += 1
            record = outcome.to_dict()
            writer.writerow([
                record['host'],
                record['account'],
                record['password'],
                record['status'],
                record['reason'] or '',
                record['timestamp']
            ])
            stream.flush()

        return dict(counts)


def get_output_strategy(format_type: str) -> OutputStrategy:
    """Factory function to get output strategy.

    Args:
        format_type: Output format type ('text', 'json', or 'csv')

    Returns:
        OutputStrategy instance
    """
    strategies = {
        'text': TextOutputStrategy(),
        'json': JsonOutputStrategy(),
        'csv': CsvOutputStrategy()
    }
    return strategies.get(format_type, TextOutputStrategy())
