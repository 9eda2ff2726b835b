# tests/test_cli.py
"""Test the command line interface"""

from concurrent.futures import Future
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from lyrics_resolver import __version__
from lyrics_resolver.exceptions import LyricsNotFoundError
from lyrics_resolver.lyrics.models import LyricLine, LyricsResult
from lyrics_resolver.main import cli


SYNCED_RESULT = LyricsResult(
    plain_text="First line\nHello there",
    synced_lines=(LyricLine(10000, "First line"), LyricLine(62500, "Hello there")),
    source="lrclib"
)
PLAIN_RESULT = LyricsResult(plain_text="Line one\nLine two\nLine three", source="lrclib")


def completed(result=None, exception=None):
    future = Future()
    if exception is not None:
        future.set_exception(exception)
    else:
        future.set_result(result)
    return future


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def resolver():
    """Mock resolver handed out by the CLI, logging setup disabled"""
    mock_resolver = Mock()
    with patch('lyrics_resolver.main.configure_from_settings'), \
            patch('lyrics_resolver.main.get_lyrics_resolver', return_value=mock_resolver):
        yield mock_resolver


class TestResolveCommand:
    """Test the resolve command"""

    def test_plain_output(self, runner, resolver):
        resolver.resolve.return_value = PLAIN_RESULT

        result = runner.invoke(cli, ['resolve', 'Numb (Official Video)', 'Linkin Park', '--duration', '187'])

        assert result.exit_code == 0
        assert "Line one\nLine two\nLine three" in result.output
        resolver.resolve.assert_called_once_with(
            'Numb (Official Video)', 'Linkin Park', duration_ms=187000, track_id=None
        )

    def test_synced_output(self, runner, resolver):
        resolver.resolve.return_value = SYNCED_RESULT

        result = runner.invoke(cli, ['resolve', 'Song', 'Artist', '--synced'])

        assert result.exit_code == 0
        assert "[00:10.00] First line" in result.output
        assert "[01:02.50] Hello there" in result.output

    def test_synced_requested_but_unavailable(self, runner, resolver):
        resolver.resolve.return_value = PLAIN_RESULT

        result = runner.invoke(cli, ['resolve', 'Song', 'Artist', '--synced'])

        assert result.exit_code == 0
        assert "No synced lyrics available" in result.output
        assert "Line one" in result.output

    def test_preview(self, runner, resolver):
        resolver.resolve.return_value = PLAIN_RESULT

        result = runner.invoke(cli, ['resolve', 'Song', 'Artist', '--preview', '2'])

        assert "Line two" in result.output
        assert "Line three" not in result.output

    def test_not_found(self, runner, resolver):
        resolver.resolve.side_effect = LyricsNotFoundError("Song", "Artist")

        result = runner.invoke(cli, ['resolve', 'Song', 'Artist'])

        assert result.exit_code == 1
        assert "No lyrics found for: Artist - Song" in result.output

    def test_unexpected_error(self, runner, resolver):
        resolver.resolve.side_effect = RuntimeError("boom")

        result = runner.invoke(cli, ['resolve', 'Song', 'Artist'])

        assert result.exit_code == 1
        assert "Error: boom" in result.output

    def test_keyboard_interrupt(self, runner, resolver):
        resolver.resolve.side_effect = KeyboardInterrupt()

        result = runner.invoke(cli, ['resolve', 'Song', 'Artist'])

        assert result.exit_code == 130


class TestOtherCommands:
    """Test variations, batch and config commands"""

    def test_variations(self, runner, resolver):
        result = runner.invoke(cli, [
            'variations', 'Arijit Singh - Tum Hi Ho (Official Video) | Aashiqui 2', 'T-Series'
        ])

        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if line.strip()]
        assert lines[0] == " 1. exact_match: 'Arijit Singh - Tum Hi Ho' / 'T-Series'"
        assert len(lines) == 8

    def test_batch(self, runner, resolver, temp_dir):
        """Test batch summary, comments and malformed lines"""
        batch_file = temp_dir / "tracks.tsv"
        batch_file.write_text(
            "# title\tartist\tseconds\n"
            "Numb\tLinkin Park\t187\n"
            "Unknown Song\tNobody\n"
            "no tab on this line\n",
            encoding='utf-8'
        )
        resolver.resolve_async.side_effect = [
            completed(SYNCED_RESULT),
            completed(exception=LyricsNotFoundError("Unknown Song", "Nobody")),
        ]

        result = runner.invoke(cli, ['batch', str(batch_file), '--show-missing'])

        assert result.exit_code == 0
        assert "Resolved 1/2 tracks (1 synced)" in result.output
        assert "Skipped 1 malformed lines" in result.output
        assert "Nobody - Unknown Song" in result.output
        resolver.resolve_async.assert_any_call('Numb', 'Linkin Park', duration_ms=187000)

    def test_config_show(self, runner, resolver):
        result = runner.invoke(cli, ['config', 'show'])

        assert result.exit_code == 0
        assert "https://lrclib.net/api" in result.output
        assert "synced_bonus: 15.0" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output
