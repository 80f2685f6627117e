"""Standings calculation.

Derived player statistics are always rebuilt from the full match list,
never patched incrementally. Every function here is pure: it reads its
arguments and returns new ``Player`` values.
"""

# Fast Four
# Copyright (C) 2025  Fast Four developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fastfour.constants import TOP_CATEGORY_MAX_RANK, WIN_POINTS
from fastfour.exceptions import InvalidTournamentDataException
from fastfour.models import Category, Group, Match, Player
from fastfour.utils import setup_logger

logger = setup_logger(__name__)


def _ranking_key(player: Player) -> Tuple[int, int]:
    # Points first, then game differential, both descending
    return (-player.points, -player.game_difference)


def category_for_rank(rank: int) -> Category:
    """Seeding pool for a 1-based group rank."""
    return Category.TOP_8 if rank <= TOP_CATEGORY_MAX_RANK else Category.BOTTOM_4


def compute_player_stats(player: Player, matches: Iterable[Match]) -> Player:
    """Rebuild one player's points and game counts from completed matches.

    A win (own score strictly greater) is worth one point. Ties and losses
    earn nothing, so a tied completed match credits no win to either side.
    """
    points = games_won = games_lost = played = 0
    for match in matches:
        if not match.completed or not match.involves(player.id):
            continue
        own, opponent = match.scores_for(player.id)
        if own > opponent:
            points += WIN_POINTS
        games_won += own
        games_lost += opponent
        played += 1

    return replace(
        player,
        points=points,
        games_won=games_won,
        games_lost=games_lost,
        matches_played=played,
    )


def rank_group(players: Sequence[Player]) -> List[Player]:
    """Order the members of one group by points, then game differential.

    The sort is stable, so fully tied players keep their relative order in
    ``players``.
    """
    return sorted(players, key=_ranking_key)


def compute_standings(
    players: Sequence[Player],
    matches: Sequence[Match],
    groups: Optional[Sequence[Group]] = None,
) -> Tuple[Player, ...]:
    """Recompute every derived field from scratch.

    1. Points, games won/lost and matches played are rebuilt for every
       player from the completed matches.
    2. Each player with a ``group_id`` is ranked among the players sharing
       that group (using the freshly rebuilt stats) and assigned a category.
       Players without a group keep whatever rank/category they had.

    Running it twice on the same inputs yields identical output.

    Args:
        players: Current players
        matches: All matches of the tournament
        groups: Optional seeding groups; when given, every ``group_id`` must
            name one of them

    Returns:
        New players, in the same order as ``players``

    Raises:
        InvalidTournamentDataException: If a player names an unknown group
    """
    if groups is not None:
        known_groups = {g.id for g in groups}
        for player in players:
            if player.group_id is not None and player.group_id not in known_groups:
                raise InvalidTournamentDataException(
                    f"Player {player.id} belongs to unknown group {player.group_id}"
                )

    with_stats = [compute_player_stats(p, matches) for p in players]

    ranks: Dict[str, int] = {}
    group_ids = []
    for player in with_stats:
        if player.group_id is not None and player.group_id not in group_ids:
            group_ids.append(player.group_id)

    for group_id in group_ids:
        members = [p for p in with_stats if p.group_id == group_id]
        for position, member in enumerate(rank_group(members), start=1):
            ranks[member.id] = position

    result = []
    for player in with_stats:
        if player.group_id is None:
            result.append(player)
            continue
        rank = ranks[player.id]
        result.append(replace(player, group_rank=rank, category=category_for_rank(rank)))

    logger.debug(
        f"Recomputed standings for {len(result)} players over "
        f"{sum(1 for m in matches if m.completed)} completed matches"
    )
    return tuple(result)


def group_standings(players: Sequence[Player], group_id: str) -> List[Player]:
    """Members of ``group_id`` in rank order, for scoreboards."""
    members = [p for p in players if p.group_id == group_id]
    return sorted(
        members,
        key=lambda p: (p.group_rank if p.group_rank is not None else len(members) + 1),
    )


def players_in_category(
    players: Sequence[Player], category: Category
) -> List[Player]:
    """Seeding pool for a playoff bracket builder.

    Ordered by group id, then group rank, so the pool reads A1, A2, B1, ...
    """
    pool = [p for p in players if p.category == category]
    return sorted(
        pool,
        key=lambda p: (p.group_id or "", p.group_rank or 0),
    )


def overall_standings(players: Sequence[Player]) -> List[Player]:
    """All players ordered for a final table.

    Players with a final position come first, in position order. The rest
    follow by points, game differential and games won.
    """
    placed = sorted(
        (p for p in players if p.final_position is not None),
        key=lambda p: p.final_position,
    )
    unplaced = sorted(
        (p for p in players if p.final_position is None),
        key=lambda p: (-p.points, -p.game_difference, -p.games_won),
    )
    return placed + unplaced
