"""
Prompt for the external coaching (text-generation) service.

Only builds the text. Sending it somewhere is up to the caller.
"""

from src.core.shared_types import Player
from src.dama.board import Board
from src.dama.rules import board_to_string

# RED is shown as Blue in the UI, so the coach hears about "Blue" as well.
DISPLAY_NAMES: dict[Player, str] = {
    Player.WHITE: "White",
    Player.RED: "Blue",
}

# Tip to show when the coaching service does not answer
FALLBACK_TIP = "Watch your lines and focus on defense!"

ADVICE_PROMPT_TEMPLATE = """You are an expert Turkish Dama coach.
Analyze the following board state.

Current Player: {player_name}

Board Representation ([ ] is empty, [B] is Blue, [W] is White, [BK]/[WK] are Kings):
{board}
Board Orientation:
- Row 0 is top. Row 7 is bottom.
- Pieces move orthogonally (up, down, left, right), never diagonally.
- White starts on rows 1-2 and moves DOWN (increasing row index).
- Blue starts on rows 5-6 and moves UP (decreasing row index).
- Captures are mandatory.

Task:
Provide a very brief, strategic tip (max 2 sentences) for the {player_name} player.
Focus on controlling the center, protecting kings, or setting up a multiple capture if visible.
Do not describe the board back to me. Just give the advice.
"""


def player_display_name(player: Player) -> str:
    return DISPLAY_NAMES[player]


def build_advice_prompt(board: Board, player: Player) -> str:
    """Fill in the template with the board dump and the name of the player to advise"""
    return ADVICE_PROMPT_TEMPLATE.format(
        player_name=player_display_name(player),
        board=board_to_string(board),
    )
