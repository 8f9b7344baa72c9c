"""Rock paper scissors."""

import random
from typing import Optional

RPS_CHOICES = ("rock", "paper", "scissors")

# key beats value
_BEATS = {"rock": "scissors", "paper": "rock", "scissors": "paper"}


def rps_outcome(user_choice: str, bot_choice: str) -> str:
    """Return 'tie', 'win' or 'lose' from the user's point of view."""
    if user_choice == bot_choice:
        return "tie"
    if _BEATS[user_choice] == bot_choice:
        return "win"
    return "lose"


def play_rps(user_choice: str, rng: Optional[random.Random] = None) -> str:
    """
    Play one round and describe the result.

    Raises:
        ValueError: If `user_choice` is not rock, paper or scissors.
    """
    choice = user_choice.strip().lower()
    if choice not in RPS_CHOICES:
        raise ValueError(f"Invalid choice: {user_choice!r}")

    bot_choice = (rng or random).choice(RPS_CHOICES)
    outcome = rps_outcome(choice, bot_choice)
    if outcome == "tie":
        return f"It's a tie! We both chose {bot_choice}."
    if outcome == "win":
        return f"You win! I chose {bot_choice}."
    return f"I win! I chose {bot_choice}."
