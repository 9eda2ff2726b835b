# tests/test_ranker.py
"""Test candidate scoring and selection"""

import pytest

from lyrics_resolver.lyrics.ranker import (
    ScoringWeights,
    rank_candidates,
    score_candidate,
    select_best_candidate
)

from conftest import make_record


# Devanagari text: no Latin letters, too short for a length bonus
NATIVE_SCRIPT = "तुम ही हो"


class TestScoreCandidate:
    """Test individual scoring rules"""

    def test_skips_instrumental(self):
        """Test instrumental candidates are never scored"""
        assert score_candidate(make_record(instrumental=True)) is None

    def test_skips_candidates_without_lyrics(self):
        """Test candidates lacking both lyric fields are never scored"""
        assert score_candidate(make_record(plain=None, synced=None)) is None

    @pytest.mark.parametrize("duration,expected", [
        (200.0, 10.0),
        (203.0, 10.0),
        (205.0, 7.0),
        (190.0, 7.0),
        (225.0, 3.0),
        (231.0, 0.0),
    ])
    def test_duration_tiers(self, duration, expected):
        """Test duration bonus tiers around a 200s target"""
        record = make_record(duration=duration, plain=NATIVE_SCRIPT)
        assert score_candidate(record, 200) == expected

    def test_no_target_duration(self):
        """Test duration is ignored when the target is unknown"""
        assert score_candidate(make_record(duration=200.0, plain=NATIVE_SCRIPT), None) == 0.0

    def test_length_bonus_capped(self):
        """Test +1 per 100 characters, capped at +5"""
        assert score_candidate(make_record(plain="a" * 250)) == 2.0 + 8.0
        assert score_candidate(make_record(plain="a" * 1000)) == 5.0 + 8.0

    def test_synced_bonus(self):
        """Test synced lyrics bonus"""
        record = make_record(plain=NATIVE_SCRIPT, synced="[00:01.00]" + NATIVE_SCRIPT)
        assert score_candidate(record) == 15.0

    def test_script_bonus_uses_synced_without_plain(self):
        """Test Latin ratio falls back to synced text"""
        record = make_record(plain=None, synced="[00:01.00]Hello world")
        assert score_candidate(record) == 15.0 + 8.0

    def test_unparseable_synced_gets_no_bonus(self):
        """Test the synced bonus needs at least one timed line with text"""
        assert score_candidate(make_record(plain=NATIVE_SCRIPT, synced="not lrc")) == 0.0
        assert score_candidate(make_record(plain=NATIVE_SCRIPT, synced="[00:01.00]\n[00:02.00]")) == 0.0

    def test_skips_synced_without_text(self):
        """Test timestamp-only or header-only LRC without plain lyrics is skipped"""
        assert score_candidate(make_record(plain=None, synced="[00:01.00]\n[00:02.00]")) is None
        assert score_candidate(make_record(plain=None, synced="[ar:Someone]\n[ti:Something]")) is None


class TestSelectBestCandidate:
    """Test candidate selection"""

    def test_synced_beats_closer_plain(self):
        """Test a synced record 40s off beats a plain record 2s off"""
        plain_close = make_record(track_name="plain", duration=202.0, plain="la la la")
        synced_far = make_record(
            track_name="synced", duration=240.0, plain="la la la", synced="[00:01.00]la la la"
        )

        assert select_best_candidate([plain_close, synced_far], 200) is synced_far
        assert select_best_candidate([synced_far, plain_close], 200) is synced_far

    def test_latin_script_preferred(self):
        """Test the transliterated upload wins over the native-script one"""
        native = make_record(track_name="native", plain=NATIVE_SCRIPT)
        latin = make_record(track_name="latin", plain="Tum hi ho")

        assert select_best_candidate([native, latin], 200) is latin

    def test_tie_keeps_first(self):
        """Test equal scores keep the first-seen candidate"""
        first = make_record(track_name="first")
        second = make_record(track_name="second")

        assert select_best_candidate([first, second], 200) is first

    def test_all_skipped(self):
        """Test no usable candidates"""
        records = [make_record(instrumental=True), make_record(plain=None, synced=None)]
        assert select_best_candidate(records, 200) is None
        assert select_best_candidate([], 200) is None

    def test_deterministic(self):
        """Test identical input gives identical output"""
        records = [
            make_record(track_name=str(index), duration=190.0 + index, plain="word " * (index * 30))
            for index in range(10)
        ]
        picks = {select_best_candidate(records, 200).track_name for _ in range(5)}
        assert len(picks) == 1

    def test_custom_weights(self):
        """Test weights are substitutable"""
        plain_close = make_record(track_name="plain", duration=202.0, plain="la la la")
        synced_far = make_record(track_name="synced", duration=240.0, plain="la la la", synced="[00:01.00]la")
        weights = ScoringWeights(synced_bonus=0.0)

        assert select_best_candidate([synced_far, plain_close], 200, weights) is plain_close


class TestScoringWeights:
    """Test weight construction"""

    def test_from_dict_partial(self):
        """Test missing keys keep their defaults"""
        weights = ScoringWeights.from_dict({'synced_bonus': 20, 'duration_tiers': [[5, 4]]})

        assert weights.synced_bonus == 20.0
        assert weights.duration_tiers == ((5.0, 4.0),)
        assert weights.length_bonus_cap == 5.0

    def test_from_settings_defaults(self):
        """Test default settings reproduce the default weights"""
        assert ScoringWeights.from_settings() == ScoringWeights()


class TestRankCandidates:
    """Test full candidate ordering"""

    def test_empty_synced_does_not_outrank_plain(self):
        """Test a record whose synced lyrics hold no text loses to a real plain record"""
        empty_synced = make_record(track_name="empty", plain=None, synced="[00:01.00]\n[00:02.00]", duration=200.0)
        plain = make_record(track_name="plain", plain="Real lyrics here", duration=240.0)

        assert select_best_candidate([plain, empty_synced], 200) is plain
        assert rank_candidates([plain, empty_synced], 200) == [plain]

    def test_order_and_ties(self):
        """Test descending score with service order kept for ties"""
        first = make_record(track_name="first", duration=240.0)
        second = make_record(track_name="second", duration=240.0)
        synced = make_record(track_name="synced", duration=240.0, synced="[00:01.00]la")

        assert rank_candidates([first, second, synced], 200) == [synced, first, second]
        assert rank_candidates([], 200) == []

    def test_fractional_target(self):
        """Test tiers compare against the unrounded target duration"""
        record = make_record(duration=203.2, plain=NATIVE_SCRIPT)

        assert score_candidate(record, 200.4) == 10.0
        assert score_candidate(record, 200) == 7.0
