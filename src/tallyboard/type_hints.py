"""Type hints used in Tally Board."""

from typing import Dict, Tuple

PlayerId = str

# Player id -> value of a tiebreak criterion
CriterionValues = Dict[PlayerId, float]

# Inclusive (start, end) indexes of a tied block of standings rows
TieBlock = Tuple[int, int]
