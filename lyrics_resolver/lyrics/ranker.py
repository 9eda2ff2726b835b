"""
Candidate ranking for fuzzy search results

The search endpoint returns several records per query, often a mix of
synced and plain versions, different edits of the same song, and
transliterated or native-script uploads. Each usable record is scored and
the highest score wins:

    synced lyrics that parse      +synced_bonus
    duration close to the target  tiered bonus (tightest tier first)
    plain lyrics length           +1 per N characters, capped
    mostly Latin letters          +latin_script_bonus

The synced bonus outweighs the best duration bonus: a synced
record 40 seconds off beats a plain record 2 seconds off.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .lrc import has_synced_content, strip_timestamps
from .models import ExternalLyricsRecord
from ..config.settings import get_settings
from ..utils.helpers import is_blank, latin_letter_ratio
from ..utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class ScoringWeights:
    """
    Scoring constants for candidate selection

    Attributes:
        synced_bonus: Added when the candidate has synced lyrics
        duration_tiers: (max difference in seconds, bonus) pairs, checked in order
        length_chars_per_point: Plain lyrics characters per length point
        length_bonus_cap: Maximum length bonus
        latin_script_bonus: Added when the Latin letter ratio exceeds the threshold
        latin_script_threshold: Latin letter ratio required for the script bonus
    """
    synced_bonus: float = 15.0
    duration_tiers: Tuple[Tuple[float, float], ...] = field(
        default=((3.0, 10.0), (10.0, 7.0), (30.0, 3.0))
    )
    length_chars_per_point: int = 100
    length_bonus_cap: float = 5.0
    latin_script_bonus: float = 8.0
    latin_script_threshold: float = 0.5

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringWeights":
        """
        Create weights from a settings dictionary

        Unknown keys are ignored, missing keys keep their defaults.

        Args:
            data: Mapping like the lyrics.scoring settings section

        Returns:
            ScoringWeights instance
        """
        defaults = cls()
        tiers = data.get('duration_tiers')
        if tiers is None:
            duration_tiers = defaults.duration_tiers
        else:
            duration_tiers = tuple((float(limit), float(bonus)) for limit, bonus in tiers)

        return cls(
            synced_bonus=float(data.get('synced_bonus', defaults.synced_bonus)),
            duration_tiers=duration_tiers,
            length_chars_per_point=max(1, int(data.get('length_chars_per_point', defaults.length_chars_per_point))),
            length_bonus_cap=float(data.get('length_bonus_cap', defaults.length_bonus_cap)),
            latin_script_bonus=float(data.get('latin_script_bonus', defaults.latin_script_bonus)),
            latin_script_threshold=float(data.get('latin_script_threshold', defaults.latin_script_threshold)),
        )

    @classmethod
    def from_settings(cls) -> "ScoringWeights":
        """Create weights from the lyrics.scoring section of the current settings"""
        return cls.from_dict(get_settings().lyrics.scoring)


DEFAULT_WEIGHTS = ScoringWeights()


def _duration_bonus(record_duration: float, target_duration: Optional[float],
                    weights: ScoringWeights) -> float:
    if not target_duration or target_duration <= 0:
        return 0.0

    difference = abs(record_duration - target_duration)
    for max_difference, bonus in weights.duration_tiers:
        if difference <= max_difference:
            return bonus
    return 0.0


def score_candidate(
    record: ExternalLyricsRecord,
    target_duration_seconds: Optional[float] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> Optional[float]:
    """
    Score a single search candidate

    Args:
        record: Candidate from the search endpoint
        target_duration_seconds: Duration of the track being resolved, if known
        weights: Scoring constants

    Returns:
        Score (higher is better) or None if the candidate must be skipped
        (instrumental, or nothing displayable in either lyrics field)
    """
    if not record.is_usable:
        return None

    synced_content = has_synced_content(record.synced_lyrics)
    if not record.has_plain and is_blank(strip_timestamps(record.synced_lyrics)):
        return None

    score = 0.0

    if synced_content:
        score += weights.synced_bonus

    score += _duration_bonus(record.duration_seconds, target_duration_seconds, weights)

    plain = record.plain_lyrics or ""
    if plain:
        length_points = len(plain) // weights.length_chars_per_point
        score += min(float(length_points), weights.length_bonus_cap)

    script_text = plain if plain.strip() else (record.synced_lyrics or "")
    if latin_letter_ratio(script_text) > weights.latin_script_threshold:
        score += weights.latin_script_bonus

    return score


def rank_candidates(
    records: Iterable[ExternalLyricsRecord],
    target_duration_seconds: Optional[float] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> List[ExternalLyricsRecord]:
    """
    Order usable candidates from best to worst

    Args:
        records: Candidates in the order the service returned them
        target_duration_seconds: Duration of the track being resolved, if known
        weights: Scoring constants

    Returns:
        Usable records by descending score, ties kept in service order
    """
    scored = []
    for record in records:
        score = score_candidate(record, target_duration_seconds, weights)
        if score is not None:
            scored.append((score, record))

    # sorted() is stable, first seen wins ties
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    if scored:
        best_score, best_record = scored[0]
        logger.debug(
            f"Best candidate '{best_record.artist_name} - {best_record.track_name}' "
            f"(score: {best_score:.1f}, {len(scored)} usable)"
        )
    return [record for _, record in scored]


def select_best_candidate(
    records: Iterable[ExternalLyricsRecord],
    target_duration_seconds: Optional[float] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> Optional[ExternalLyricsRecord]:
    """Highest scoring usable record (first seen wins ties) or None"""
    ranked = rank_candidates(records, target_duration_seconds, weights)
    return ranked[0] if ranked else None
