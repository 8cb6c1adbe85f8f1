"""Type hints used in Swiss Meta."""

from typing import Dict, List, Literal, Tuple

# Win probability table, row deck vs column deck
MatchupMatrix = List[List[float]]

# Deck name -> count
DeckCounts = Dict[str, int]

# Worker message types
MessageType = Literal["progress", "complete", "error"]

# List of players
Players = List["Player"]
# One round's pairings, as player ids
RoundPairings = List[Tuple[int, int]]
