"""Rich renderables for the battle screen.

Pure functions: session/team snapshots in, rich renderables out. The CLI
decides when to print them.
"""
from __future__ import annotations
from typing import List

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Group
from rich.panel import Panel
from rich.table import Table

from pokebattle.battle.models import Combatant, Move
from pokebattle.battle.session import BattleSession
from pokebattle.battle.team import Team
from pokebattle.ui.theme import format_types, compact_types, status_badge, hp_color, type_tag

HP_BAR_WIDTH = 20


def hp_bar(current: int, max_hp: int, width: int = HP_BAR_WIDTH) -> str:
    if max_hp <= 0 or current <= 0:
        return "[red]" + "░" * width + "[/red] FAINTED"
    filled = max(1, int(current / max_hp * width))
    color = hp_color(current, max_hp)
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


def combatant_panel(c: Combatant, title: str) -> Panel:
    body = (
        f"[bold]{c.display_name}[/bold] Lv{c.level}{status_badge(c.status)}\n"
        f"{format_types(c.types)}\n"
        f"{hp_bar(c.hp, c.max_hp)}\n"
        f"{c.hp} / {c.max_hp} HP"
    )
    return Panel(body, title=f"[bold]{title}[/bold]", box=ROUNDED, width=40, padding=(0, 1))


def team_preview(team: Team) -> Table:
    table = Table(box=None, show_header=False, padding=(0, 2))
    cells: List[str] = []
    for i, m in enumerate(team.members):
        marker = "►" if i == team.active_index else " "
        name = f"[dim strike]{m.display_name}[/dim strike]" if m.is_fainted else m.display_name
        cells.append(f"{marker} {name} {compact_types(m.types)} [{hp_color(m.hp, m.max_hp)}]{m.hp}/{m.max_hp}[/]")
        table.add_column()
    if cells:
        table.add_row(*cells)
    return table


def move_table(moves: List[Move]) -> Table:
    table = Table(title="[bold]Moves[/bold]", box=ROUNDED, show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Move")
    table.add_column("Type")
    table.add_column("Power", justify="right")
    table.add_column("Acc", justify="right")
    for i, mv in enumerate(moves, 1):
        table.add_row(str(i), mv.display_name, type_tag(mv.type), str(mv.power or "--"), str(mv.accuracy))
    return table


def switch_table(team: Team) -> Table:
    table = Table(title="[bold]Choose a Pokémon[/bold]", box=ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("HP", justify="right")
    for i in team.healthy_bench():
        m = team.members[i]
        table.add_row(str(i + 1), m.display_name, f"{m.hp}/{m.max_hp}")
    return table


def battle_screen(session: BattleSession, log_lines: int = 5) -> Group:
    enemy = session.enemy_active
    player = session.player_active
    panels = []
    if enemy is not None:
        panels.append(combatant_panel(enemy, "OPPONENT"))
    if player is not None:
        panels.append(combatant_panel(player, "YOUR POKÉMON"))
    log = Panel("\n".join(session.recent_log(log_lines)) or " ", title="Battle Log", box=ROUNDED)
    return Group(
        Align.center(team_preview(session.enemy)),
        Align.center(Columns(panels, equal=True, padding=(0, 4))),
        Align.center(team_preview(session.player)),
        log,
    )

__all__ = ["hp_bar", "combatant_panel", "team_preview", "move_table", "switch_table", "battle_screen"]
