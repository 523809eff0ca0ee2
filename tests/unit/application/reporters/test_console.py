"""Tests for ConsoleReporter.

Tests:
- ConsoleConfig default values and validation
- ConsoleReporter report() output for unfiltered and filtered blocks
- Transaction limit, unmatched action hiding
"""

import pytest

from blockfilter.application.reporters.console import ConsoleConfig, ConsoleReporter
from blockfilter.application.services.block_filter import build
from tests.factories import make_block, make_example_block


@pytest.fixture
def filtered_report() -> str:
    block = make_example_block()
    build('account == "eosio.token"', 'action == "issue"').transform_block(block)
    return ConsoleReporter().report(block)


class TestConsoleConfig:
    """Tests for ConsoleConfig."""

    def test_default_values(self) -> None:
        """Default values are set correctly."""
        config = ConsoleConfig()
        assert config.show_actions is True
        assert config.show_unmatched is True
        assert config.max_transactions is None
        assert config.width == 120

    def test_negative_max_transactions_raises(self) -> None:
        with pytest.raises(ValueError, match="max_transactions must be >= 0"):
            ConsoleConfig(max_transactions=-1)

    def test_narrow_width_raises(self) -> None:
        with pytest.raises(ValueError, match="width must be >= 40"):
            ConsoleConfig(width=20)


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_report_contains_header(self) -> None:
        """report() contains BLOCK FILTER RESULT header and block identity."""
        output = ConsoleReporter().report(make_block())
        assert "BLOCK FILTER RESULT" in output
        assert "#100 00000064a1b2c3d4" in output

    def test_unfiltered_block(self) -> None:
        """Block never filtered says so."""
        output = ConsoleReporter().report(make_example_block())
        assert "Filtering not applied" in output
        assert "Include:" not in output

    def test_filtered_block_shows_expressions(self, filtered_report: str) -> None:
        assert 'account == "eosio.token"' in filtered_report
        assert 'action == "issue"' in filtered_report

    def test_filtered_block_lists_retained_transactions(self, filtered_report: str) -> None:
        assert "T1" in filtered_report
        assert "T3" in filtered_report
        assert "T2" not in filtered_report

    def test_actions_rendered(self, filtered_report: str) -> None:
        assert "eosio.token::transfer" in filtered_report
        assert "eosio.token::issue" in filtered_report
        assert "deferred" in filtered_report

    def test_empty_expressions_rendered_as_placeholders(self) -> None:
        block = make_example_block()
        build('action == "transfer"', "").transform_block(block)

        output = ConsoleReporter().report(block)

        assert "(none)" in output

    def test_markup_in_expression_escaped(self) -> None:
        """Square brackets in expressions are printed, not parsed as markup."""
        block = make_example_block()
        build('action in ["transfer"]', "").transform_block(block)

        output = ConsoleReporter().report(block)

        assert '["transfer"]' in output

    def test_max_transactions(self) -> None:
        output = ConsoleReporter(ConsoleConfig(max_transactions=1)).report(make_example_block())
        assert "T1" in output
        assert "T2" not in output

    def test_hide_unmatched(self) -> None:
        block = make_example_block()
        build('account == "eosio.token"', 'action == "issue"').transform_block(block)

        output = ConsoleReporter(ConsoleConfig(show_unmatched=False)).report(block)

        assert "eosio.token::transfer" in output
        assert "eosio.token::issue" not in output

    def test_no_action_tables(self) -> None:
        output = ConsoleReporter(ConsoleConfig(show_actions=False)).report(make_example_block())
        assert "::" not in output
