"""Terminal front end: mode select, team builder and the battle loop.

Input goes through ``rich.prompt`` so the loop runs in any terminal; all
battle logic lives in :mod:`pokebattle.battle`.
"""
from __future__ import annotations
import argparse
import random
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table
from rich.box import ROUNDED

from pokebattle.core.errors import BattleError, DataLoadError
from pokebattle.core.logging import logger
from pokebattle.system.settings import Settings
from pokebattle.data.loader import load_roster, eligible_species, base_stat_total, Roster
from pokebattle.battle.factory import combatant_from_species, random_team
from pokebattle.battle.models import Combatant
from pokebattle.battle.session import BattleSession
from pokebattle.battle.team import Team, TEAM_SIZE, BattleOutcome
from pokebattle.ui.battle import battle_screen, move_table, switch_table
from pokebattle.ui.theme import format_types

console = Console()


def _species_table(pool: List[dict]) -> Table:
    table = Table(title="[bold]Select Pokémon (400+ base stats)[/bold]", box=ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Types")
    table.add_column("BST", justify="right")
    for i, s in enumerate(pool, 1):
        table.add_row(str(i), s["name"].title(), format_types(s["types"]), str(base_stat_total(s)))
    return table


def build_custom_team(roster: Roster, settings: Settings) -> Team:
    pool = eligible_species(roster, settings.data.min_base_stat_total)
    picked: List[Combatant] = []
    console.print(_species_table(pool))
    while len(picked) < TEAM_SIZE:
        console.print(f"Your team ({len(picked)}/{TEAM_SIZE}): " + ", ".join(c.display_name for c in picked))
        raw = Prompt.ask("Add a Pokémon by number (blank to start)", default="")
        if not raw:
            if picked:
                break
            console.print("[yellow]Pick at least one Pokémon.[/yellow]")
            continue
        if not raw.isdigit() or not 1 <= int(raw) <= len(pool):
            console.print("[red]Not a valid choice.[/red]")
            continue
        picked.append(combatant_from_species(pool[int(raw) - 1], roster, settings.data.level))
    return Team.of(picked)


def _choose_move(session: BattleSession) -> Optional[int]:
    player = session.player_active
    if player is None:
        return -1
    console.print(move_table(list(player.moves)))
    raw = Prompt.ask("Move number, [bold]s[/bold] to switch", default="1")
    if raw.lower() == "s":
        return None
    if raw.isdigit() and 1 <= int(raw) <= len(player.moves):
        idx = int(raw) - 1
        if Confirm.ask(f"Use {player.moves[idx].display_name}?", default=True):
            return idx
    return -1


def _choose_switch(session: BattleSession) -> Optional[int]:
    bench = session.player.healthy_bench()
    if not bench:
        console.print("[yellow]No other Pokémon can battle![/yellow]")
        return None
    console.print(switch_table(session.player))
    raw = IntPrompt.ask("Switch to (0 to go back)", default=0)
    if raw - 1 in bench:
        return raw - 1
    return None


def run_battle(session: BattleSession) -> BattleOutcome:
    while not session.is_over():
        console.clear()
        console.print(battle_screen(session))
        choice = _choose_move(session)
        if choice is None:
            target = _choose_switch(session)
            if target is not None:
                session.switch(target)
        elif choice >= 0:
            session.use_move(choice)
    console.clear()
    console.print(battle_screen(session))
    return session.outcome


def play(settings: Settings, roster: Roster, rng: random.Random):
    console.print(Panel("[bold]Choose Battle Mode[/bold]\n1) Custom Team  2) Random Battle", box=ROUNDED))
    mode = Prompt.ask("Mode", choices=["1", "2"], default="2")
    level = settings.data.level
    min_total = settings.data.min_base_stat_total
    if mode == "1":
        player = build_custom_team(roster, settings)
    else:
        player = random_team(roster, rng, level=level, min_total=min_total)
    enemy = random_team(roster, rng, level=level, min_total=min_total)
    outcome = run_battle(BattleSession(player, enemy, rng))
    console.print("[bold green]You win![/bold green]" if outcome == BattleOutcome.WIN else "[bold red]You lost![/bold red]")
    return outcome


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="pokebattle", description="3v3 turn-based battle simulator")
    parser.add_argument("--seed", type=int, help="seed the battle RNG")
    parser.add_argument("--level", type=int, help="level for every combatant")
    parser.add_argument("--roster", help="path to an alternate roster JSON")
    parser.add_argument("--debug", action="store_true", help="verbose battle logging")
    args = parser.parse_args(argv)

    settings = Settings.load()
    if args.seed is not None:
        settings.data.seed = args.seed
    if args.level is not None:
        settings.data.level = args.level
    if args.roster:
        settings.data.roster_path = args.roster
    if args.debug:
        settings.data.debug = True
    settings.data.normalize()
    settings.apply()

    try:
        roster = load_roster(settings.data.roster_path)
    except DataLoadError as e:
        logger.error("RosterUnavailable", path=e.path, detail=e.detail)
        console.print(f"[red]{e}[/red]")
        return 1
    rng = settings.make_rng()
    while True:
        try:
            play(settings, roster, rng)
        except BattleError as e:
            logger.error("BattleAborted", error=str(e))
            console.print(f"[red]{e}[/red]")
        if not Confirm.ask("Battle again?", default=False):
            return 0


def run():
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        console.print("\nBye!")

__all__ = ["main", "run", "run_battle", "build_custom_team"]
