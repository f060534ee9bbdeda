"""Tests for output strategies."""
import csv
import json
from io import StringIO

import pytest

from falcon_admin_rotation.cli.output_strategies import (
    CSV_HEADERS,
    CsvOutputStrategy,
    JsonOutputStrategy,
    TextOutputStrategy,
    get_output_strategy,
)
from falcon_admin_rotation.rotation.results import FailureReason, RotationOutcome, RotationStatus

TIMESTAMP = '2026-03-01T12:00:00Z'


@pytest.fixture
def sample_outcomes():
    """One outcome per public status."""
    return [
        RotationOutcome(host='WKS01', account='Administrator', password='WKS01Recycling*3ftw!',
                        status=RotationStatus.SUCCESSFUL, timestamp=TIMESTAMP),
        RotationOutcome(host='WKS02', account='Administrator', password='',
                        status=RotationStatus.NETWORK_CONNECTION_FAILED,
                        reason=FailureReason.UNREACHABLE,
                        error='Host did not respond to the reachability probe', timestamp=TIMESTAMP),
        RotationOutcome(host='WKS03', account='Administrator', password='Pw1!attempted',
                        status=RotationStatus.PASSWORD_SET_FAILED,
                        reason=FailureReason.APPLY_REJECTED,
                        error='Access is denied.', timestamp=TIMESTAMP),
    ]


EXPECTED_COUNTS = {'Successful': 1, 'NetworkConnectionFailed': 1, 'PasswordSetFailed': 1}


class TestTextOutputStrategy:
    """Test console output."""

    def test_lines_and_summary(self, mock_ctx, output_buffer, sample_outcomes):
        """Test each host gets a line and the summary totals them."""
        counts = TextOutputStrategy().output(sample_outcomes, mock_ctx, None)

        text = output_buffer.getvalue()
        assert counts == EXPECTED_COUNTS
        assert 'WKS01 Administrator Successful  WKS01Recycling*3ftw!' in text
        assert 'WKS02 Administrator NetworkConnectionFailed (Unreachable:' in text
        assert 'WKS03 Administrator PasswordSetFailed (ApplyRejected: Access is denied.)' in text
        assert 'Rotation Summary' in text
        assert 'Total' in text

    def test_failed_password_not_printed(self, mock_ctx, output_buffer, sample_outcomes):
        """Test attempted passwords only appear for successful hosts."""
        TextOutputStrategy().output(sample_outcomes, mock_ctx, None)
        assert 'Pw1!attempted' not in output_buffer.getvalue()

    def test_markup_characters_printed_verbatim(self, mock_ctx, output_buffer):
        """Test passwords containing square brackets are not read as markup."""
        outcome = RotationOutcome(host='WKS01', account='Administrator', password='Ab1[/bold]x[red]',
                                  status=RotationStatus.SUCCESSFUL, timestamp=TIMESTAMP)

        TextOutputStrategy().output([outcome], mock_ctx, None)

        assert 'Ab1[/bold]x[red]' in output_buffer.getvalue()

    def test_writes_to_stream(self, mock_ctx, output_buffer, sample_outcomes):
        """Test a given stream is used instead of the context console."""
        stream = StringIO()
        TextOutputStrategy().output(sample_outcomes, mock_ctx, stream)

        assert 'WKS01' in stream.getvalue()
        assert output_buffer.getvalue() == ''

    def test_empty(self, mock_ctx, output_buffer):
        """Test an empty batch still prints the summary."""
        assert TextOutputStrategy().output([], mock_ctx, None) == {}
        assert 'Rotation Summary' in output_buffer.getvalue()


class TestJsonOutputStrategy:
    """Test NDJSON output."""

    def test_one_object_per_line(self, mock_ctx, sample_outcomes):
        """Test every outcome is a JSON line."""
        stream = StringIO()
        counts = JsonOutputStrategy().output(sample_outcomes, mock_ctx, stream)

        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert counts == EXPECTED_COUNTS
        assert [r['host'] for r in records] == ['WKS01', 'WKS02', 'WKS03']
        assert records[0] == {
            'host': 'WKS01',
            'account': 'Administrator',
            'password': 'WKS01Recycling*3ftw!',
            'status': 'Successful',
            'reason': None,
            'error': None,
            'timestamp': TIMESTAMP
        }
        assert records[1]['reason'] == 'Unreachable'

    def test_streams_lazily(self, mock_ctx, sample_outcomes):
        """Test each record is written before the next outcome is produced."""
        stream = StringIO()
        seen = []

        def outcomes():
            for outcome in sample_outcomes:
                seen.append(stream.getvalue().count('\n'))
                yield outcome

        JsonOutputStrategy().output(outcomes(), mock_ctx, stream)
        assert seen == [0, 1, 2]


class TestCsvOutputStrategy:
    """Test CSV output."""

    def test_rows(self, mock_ctx, sample_outcomes):
        """Test header and row contents."""
        stream = StringIO()
        counts = CsvOutputStrategy().output(sample_outcomes, mock_ctx, stream)

        rows = list(csv.reader(StringIO(stream.getvalue())))
        assert counts == EXPECTED_COUNTS
        assert rows[0] == CSV_HEADERS
        assert rows[1] == ['WKS01', 'Administrator', 'WKS01Recycling*3ftw!', 'Successful', '', TIMESTAMP]
        assert rows[2] == ['WKS02', 'Administrator', '', 'NetworkConnectionFailed', 'Unreachable', TIMESTAMP]
        assert rows[3][3:5] == ['PasswordSetFailed', 'ApplyRejected']

    def test_quotes_special_characters(self, mock_ctx):
        """Test passwords containing CSV metacharacters survive a round trip."""
        outcome = RotationOutcome(host='WKS01', account='Administrator', password='a,"b"\'c1A',
                                  status=RotationStatus.SUCCESSFUL, timestamp=TIMESTAMP)
        stream = StringIO()
        CsvOutputStrategy().output([outcome], mock_ctx, stream)

        rows = list(csv.reader(StringIO(stream.getvalue())))
        assert rows[1][2] == 'a,"b"\'c1A'

    def test_header_only_for_empty_batch(self, mock_ctx):
        """Test an empty batch writes only the header."""
        stream = StringIO()
        CsvOutputStrategy().output([], mock_ctx, stream)
        assert list(csv.reader(StringIO(stream.getvalue()))) == [CSV_HEADERS]


class TestGetOutputStrategy:
    """Test strategy selection."""

    @pytest.mark.parametrize('format_type,expected', [
        ('text', TextOutputStrategy),
        ('json', JsonOutputStrategy),
        ('csv', CsvOutputStrategy),
        ('unknown', TextOutputStrategy),
    ])
    def test_selection(self, format_type, expected):
        """Test each format maps to its strategy."""
        assert isinstance(get_output_strategy(format_type), expected)
