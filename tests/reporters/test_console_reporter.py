# tests/reporters/test_console_reporter.py
"""
Unit tests for the ConsoleReporter class.
"""

from decimal import Decimal
from io import StringIO
from unittest.mock import MagicMock

from rich.console import Console

from hybridscaler.models.learning import Action, LearningState
from hybridscaler.models.resources import Resources, ResourcesList, ScalingDecision
from hybridscaler.reporters.console_reporter import ConsoleReporter


def make_reporter():
    output = StringIO()
    return ConsoleReporter(Console(file=output, width=160, no_color=True)), output


def test_report_shows_changes(make_state):
    state = make_state()
    decision = ScalingDecision(
        replicas=6,
        container_resources={
            "app": Resources(
                requests=ResourcesList(cpu=Decimal("0.15"), memory=Decimal(100000000)),
                limits=ResourcesList(cpu=Decimal("0.3"), memory=Decimal(200000000)),
            )
        },
        description="HYBRID",
    )
    reporter, output = make_reporter()

    reporter.report(decision, state)

    text = output.getvalue()
    assert "Replicas: 4 → 6" in text
    assert "Scaling Decision (HYBRID)" in text
    assert "100m → 150m" in text
    assert "200m → 300m" in text


def test_report_without_containers():
    reporter, output = make_reporter()

    reporter.report(ScalingDecision(replicas=2))

    assert "Replicas: 2" in output.getvalue()
    assert "No container resources to report." in output.getvalue()


def test_report_learning_state(mocker):
    mock_table_class = mocker.patch("hybridscaler.reporters.console_reporter.Table")
    mock_table = mock_table_class.return_value
    mock_console = MagicMock()
    reporter = ConsoleReporter(mock_console)
    learning_state = LearningState(
        table={"4_0_0_100_100": {Action.NONE: Decimal("0.8"), Action.HORIZONTAL: Decimal(0)}},
        previous_action=Action.HORIZONTAL,
    )

    reporter.report_learning_state(learning_state)

    assert mock_table.add_column.call_count == 6
    row = mock_table.add_row.call_args.args
    assert row[0] == "4_0_0_100_100"
    assert row[1] == "0.8"
    assert row[2] == "[bold green]0[/]"
    assert row[3] == "-"
    mock_console.print.assert_any_call(mock_table)


def test_report_empty_learning_state():
    reporter, output = make_reporter()

    reporter.report_learning_state(LearningState())

    assert "The Q-table is empty." in output.getvalue()
