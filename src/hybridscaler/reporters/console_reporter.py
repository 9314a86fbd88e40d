# src/hybridscaler/reporters/console_reporter.py
"""
A reporter that displays scaling decisions and Q-tables in the console.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..models.learning import ALL_ACTIONS, LearningState
from ..models.resources import ScalingDecision, State
from ..reinforcement.q_learning import best_action_value_in_state
from ..utils.k8s_utils import format_quantity
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)


class ConsoleReporter(BaseReporter):
    """
    Renders hybrid scaler data to the console using the 'rich' library.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report(self, decision: ScalingDecision, state: Optional[State] = None):
        """
        Displays the decided replicas and container resources. With a state,
        the current values are shown next to the new ones.
        """
        title = "Scaling Decision"
        if decision.description:
            title = f"{title} ({decision.description})"

        current_replicas = state.replicas if state is not None else None
        if current_replicas is not None and current_replicas != decision.replicas:
            self.console.print(f"Replicas: {current_replicas} → [bold green]{decision.replicas}[/]")
        else:
            self.console.print(f"Replicas: [bold]{decision.replicas}[/]")

        if not decision.container_resources:
            self.console.print("No container resources to report.", style="yellow")
            return

        table = Table(title=title, header_style="bold magenta", show_lines=True)
        table.add_column("Container", style="cyan")
        table.add_column("CPU Req", style="blue", justify="right")
        table.add_column("CPU Lim", style="blue", justify="right")
        table.add_column("Mem Req", style="green", justify="right")
        table.add_column("Mem Lim", style="green", justify="right")

        for name in sorted(decision.container_resources):
            new = decision.container_resources[name]
            old = state.container_resources.get(name) if state is not None else None
            cells = []
            for attribute, resource in (
                ("requests", "cpu"),
                ("limits", "cpu"),
                ("requests", "memory"),
                ("limits", "memory"),
            ):
                new_value = getattr(getattr(new, attribute), resource)
                cell = format_quantity(new_value)
                if old is not None:
                    old_value = getattr(getattr(old, attribute), resource)
                    if old_value != new_value:
                        cell = f"{format_quantity(old_value)} → {cell}"
                cells.append(cell)
            table.add_row(name, *cells)

        self.console.print(table)

    def report_learning_state(self, learning_state: LearningState):
        """
        Displays one row per visited state with the cost of every action. The
        cheapest actions of each state are highlighted.
        """
        if learning_state.previous_state is not None:
            self.console.print(
                f"Previous state: [cyan]{learning_state.previous_state.name}[/], "
                f"action: [cyan]{learning_state.previous_action.value if learning_state.previous_action else '-'}[/]"
            )

        if not learning_state.table:
            self.console.print("The Q-table is empty.", style="yellow")
            return

        table = Table(title="Q-Table (expected cost)", header_style="bold magenta", show_lines=True)
        table.add_column("State", style="cyan")
        for action in ALL_ACTIONS:
            table.add_column(action.value, justify="right")

        for state_name in sorted(learning_state.table):
            row = learning_state.table[state_name]
            best = best_action_value_in_state(state_name, learning_state.table)
            cells = []
            for action in ALL_ACTIONS:
                value = row.get(action)
                if value is None:
                    cells.append("-")
                elif value <= best:
                    cells.append(f"[bold green]{value}[/]")
                else:
                    cells.append(str(value))
            table.add_row(state_name, *cells)

        self.console.print(table)
