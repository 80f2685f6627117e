"""Type hints used in Fast Four."""

from typing import Mapping, Sequence, Tuple

PlayerId = str

# A pairing of two player ids for one match
Pairing = Tuple[PlayerId, PlayerId]
# All pairings for one round
RoundPairings = Sequence[Pairing]
# Player id -> final placing, supplied at finalization
FinalPositions = Mapping[PlayerId, int]
