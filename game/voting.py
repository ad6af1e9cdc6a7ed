"""
Vote Manager for Imposter Party.

Validates a complete vote submission, counts the votes and judges the outcome.
Contains no lifecycle logic - purely voting mechanics.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Sequence

from utils.constants import OUTCOME_MESSAGES
from .errors import IncompleteVoteSet, InvalidVote
from .models import PlayerData, TallyEntry, Outcome, OutcomeBand

logger = logging.getLogger(__name__)

class VoteManager:
    """
    Manages vote validation, counting, and outcome determination.

    Votes map a voter's player id to the roster index they accuse.
    """

    def validate_submission(self, votes: Mapping, active_players: Sequence) -> Dict[int, int]:
        """
        Check that a submission covers exactly the active roster.

        Args:
            votes: voter player id (int or numeric string) -> accused roster index
            active_players: Players on the roster, each with `id` and `index`

        Returns:
            Normalized votes keyed by integer player id

        Raises:
            IncompleteVoteSet: when voters are missing or unknown
            InvalidVote: when an accused index is not on the roster
        """
        if not isinstance(votes, Mapping):
            raise InvalidVote("Votes must map voter ids to accused seats",
                              {'votes': type(votes).__name__})

        active_ids = {player.id for player in active_players}

        normalized = {}
        unexpected = []
        for voter, accused in votes.items():
            try:
                voter_id = int(voter)
            except (TypeError, ValueError):
                unexpected.append(voter)
                continue
            if voter_id not in active_ids:
                unexpected.append(voter)
                continue
            normalized[voter_id] = accused

        missing = active_ids - set(normalized)
        if missing or unexpected:
            raise IncompleteVoteSet(missing, unexpected)

        for voter_id, accused in normalized.items():
            if isinstance(accused, bool) or not isinstance(accused, int) \
                    or not 0 <= accused < len(active_players):
                raise InvalidVote(
                    f"Player {voter_id} voted for seat {accused!r}, which is not on the roster",
                    {'voter': voter_id, 'accused': accused}
                )

        return normalized

    def tally(self, players: Sequence[PlayerData], votes: Mapping[int, int],
              imposter_indices: Iterable[int]) -> List[TallyEntry]:
        """
        Count accusations per roster seat.

        Sorted by vote count descending; equal counts keep roster order.
        """
        imposters = set(imposter_indices)
        counts = Counter((votes or {}).values())

        entries = [
            TallyEntry(
                player=player,
                vote_count=counts.get(player.index, 0),
                is_imposter=player.index in imposters
            )
            for player in sorted(players, key=lambda p: p.index)
        ]
        # sorted() is stable, so ties stay in roster order
        return sorted(entries, key=lambda entry: entry.vote_count, reverse=True)

    def judge_outcome(self, tally: Sequence[TallyEntry], imposter_indices: Iterable[int]) -> Outcome:
        """
        Judge the vote.

        The first tally entry is the top accused. With no votes at all this is
        simply the player at seat 0.
        """
        total_imposters = len(set(imposter_indices))
        top = tally[0] if tally else None

        accused_is_imposter = bool(top and top.is_imposter)
        imposters_with_votes = sum(1 for entry in tally if entry.is_imposter and entry.vote_count > 0)
        all_caught = imposters_with_votes == total_imposters

        if not accused_is_imposter:
            band = OutcomeBand.IMPOSTER_VICTORY
        elif all_caught:
            band = OutcomeBand.FULL_SUCCESS
        else:
            band = OutcomeBand.PARTIAL_SUCCESS

        outcome = Outcome(
            success=accused_is_imposter and all_caught,
            accused_is_imposter=accused_is_imposter,
            all_imposters_caught=all_caught,
            band=band,
            top_accused=top.player if top else None,
            imposters_with_votes=imposters_with_votes,
            total_imposters=total_imposters
        )
        logger.debug(f"Judged vote: {band.value} ({imposters_with_votes}/{total_imposters} imposters implicated)")
        return outcome

    @staticmethod
    def outcome_message(outcome: Outcome) -> str:
        """Message for the results screen."""
        return OUTCOME_MESSAGES[outcome.band.value]
