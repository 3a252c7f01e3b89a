"""Battle session orchestration for 3v3 team battles.

Thin sequencing layer over :mod:`pokebattle.battle.mechanics`. The session
privately owns both teams and the message log; every turn swaps in the new
snapshots returned by the resolver.
"""
from __future__ import annotations
from typing import List, Optional
import random
from pokebattle.core.logging import logger
from .models import Combatant, Move
from .mechanics import check_can_act, resolve_move, process_turn_end_status
from .team import Team, SideState, BattleOutcome, resolve_outcome
from .ai import choose_move, STRUGGLE

PLAYER = "player"
ENEMY = "enemy"


class BattleSession:
    def __init__(self, player: Team, enemy: Team, rng: Optional[random.Random] = None):
        self.player = player
        self.enemy = enemy
        self.rng = rng or random.Random()
        self.turn_counter = 0
        self.log: List[str] = ["Battle started!"]
        self.outcome = resolve_outcome(player, enemy)
        logger.info("BattleStart",
                    player=[m.name for m in player.members],
                    enemy=[m.name for m in enemy.members])

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def player_active(self) -> Optional[Combatant]:
        return self.player.active()

    @property
    def enemy_active(self) -> Optional[Combatant]:
        return self.enemy.active()

    def is_over(self) -> bool:
        return self.outcome != BattleOutcome.ONGOING

    def _team(self, side: str) -> Team:
        return self.player if side == PLAYER else self.enemy

    def _set_active(self, side: str, combatant: Combatant):
        if side == PLAYER:
            self.player = self.player.with_active(combatant)
        else:
            self.enemy = self.enemy.with_active(combatant)

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    def use_move(self, move_index: int = 0) -> List[str]:
        """Resolve one full turn with the player's chosen move."""
        player = self.player.active()
        if self.is_over() or player is None:
            return []
        messages: List[str] = []
        move = player.moves[move_index] if 0 <= move_index < len(player.moves) else STRUGGLE

        if self._act(PLAYER, ENEMY, move, messages) and not self._resolve_faint(ENEMY, messages):
            enemy = self.enemy.active()
            if enemy is not None:
                self._act(ENEMY, PLAYER, choose_move(enemy, self.rng), messages)
                self._resolve_faint(PLAYER, messages)
        if not self.is_over():
            self._end_of_turn(messages)
        return self._finish_turn(messages)

    def switch(self, index: int) -> List[str]:
        """Voluntary switch: forfeits the turn and grants the foe a free hit."""
        enemy = self.enemy.active()
        if self.is_over() or enemy is None:
            return []
        messages: List[str] = []
        self.player = self.player.switch_to(index)
        incoming = self.player.members[index]
        messages.append(f"Go {incoming.display_name}!")

        result = resolve_move(enemy, incoming, choose_move(enemy, self.rng), self.rng, secondary=False)
        self._set_active(ENEMY, result.attacker)
        self._set_active(PLAYER, result.defender)
        messages.extend(result.messages)
        self._resolve_faint(PLAYER, messages)
        if not self.is_over():
            self._end_of_turn(messages)
        return self._finish_turn(messages)

    # ------------------------------------------------------------------
    # Turn steps
    # ------------------------------------------------------------------
    def _act(self, side: str, target_side: str, move: Move, messages: List[str]) -> bool:
        """Gate then execute ``move``. Returns False when the turn ends early."""
        actor = self._team(side).active()
        target = self._team(target_side).active()
        if actor is None or target is None:
            return False
        check = check_can_act(actor, self.rng)
        self._set_active(side, check.combatant)
        messages.extend(check.messages)
        if not check.can_act:
            return False
        result = resolve_move(check.combatant, target, move, self.rng)
        self._set_active(side, result.attacker)
        self._set_active(target_side, result.defender)
        messages.extend(result.messages)
        logger.debug("MoveResolved", attacker=actor.name, move=move.name,
                     damage=result.damage, effectiveness=result.effectiveness)
        return True

    def _resolve_faint(self, side: str, messages: List[str]) -> bool:
        """Handle a fainted active member on ``side``. Returns True if it fainted."""
        team = self._team(side)
        current = team.active()
        if current is None or not current.is_fainted:
            return False
        messages.append(f"{current.display_name} fainted!")
        logger.debug("SideState", side=side, state=SideState.FAINTED.value)
        state = team.side_state()
        logger.debug("SideState", side=side, state=state.value)
        if state == SideState.AWAITING_SWITCH:
            team = team.send_out_next()
            nxt = team.members[team.active_index]
            if side == PLAYER:
                self.player = team
                messages.append(f"Go {nxt.display_name}!")
            else:
                self.enemy = team
                messages.append(f"Enemy sent out {nxt.display_name}!")
        else:
            self.outcome = resolve_outcome(self.player, self.enemy)
            messages.append("You win!" if self.outcome == BattleOutcome.WIN else "You lost!")
        return True

    def _end_of_turn(self, messages: List[str]):
        for side in (PLAYER, ENEMY):
            current = self._team(side).active()
            if current is None:
                continue
            result = process_turn_end_status(current)
            if result.damage_applied:
                self._set_active(side, result.combatant)
                messages.append(result.message)
                if self._resolve_faint(side, messages) and self.is_over():
                    return

    def _finish_turn(self, messages: List[str]) -> List[str]:
        self.turn_counter += 1
        self.log.extend(messages)
        logger.debug("TurnResolved", turn=self.turn_counter, messages=len(messages))
        if self.is_over():
            logger.info("BattleEnd", outcome=self.outcome.value, turns=self.turn_counter)
        return messages

    def recent_log(self, count: int = 5) -> List[str]:
        return self.log[-count:]

__all__ = ["BattleSession", "PLAYER", "ENEMY"]
