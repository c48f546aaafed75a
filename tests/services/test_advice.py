"""Unit tests for src/services/advice.py"""

import pytest

from src.core.shared_types import Player
from src.dama.rules import board_to_string, create_initial_board
from src.services.advice import build_advice_prompt, player_display_name


@pytest.mark.parametrize("player, name", [(Player.WHITE, "White"), (Player.RED, "Blue")])
def test_display_names(player: Player, name: str) -> None:
    """RED is called Blue towards the players (and the coach)"""
    assert player_display_name(player) == name


def test_prompt_contains_board_dump() -> None:
    board = create_initial_board()
    prompt = build_advice_prompt(board, Player.WHITE)
    assert board_to_string(board) in prompt


@pytest.mark.parametrize("player", [p for p in Player])
def test_prompt_addresses_player_to_move(player: Player) -> None:
    prompt = build_advice_prompt(create_initial_board(), player)
    name = player_display_name(player)
    assert f"Current Player: {name}" in prompt
    assert f"for the {name} player" in prompt
