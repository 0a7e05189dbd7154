"""Integration tests for end-to-end workflows."""

import json
import logging
from datetime import datetime
from pathlib import Path

import pytest

import season_report
from racepoints.config import SEASON_PRESETS, get_season_config, load_config
from racepoints.exceptions import (
    DuplicateEventError,
    MalformedLineError,
    MissingEventIdentifierError,
)
from racepoints.loader import extract_event_id, read_event_directory
from racepoints.logging_config import log_file_path, setup_logging
from racepoints.models import ClassNaming, DriverStanding, RowMode
from racepoints.pipeline import run_season
from racepoints.schemas import SeasonConfig

# Alice wins every round, Bob is second except when absent, Carol drifts down
ROUNDS = {
    'Round 1 - Event 1.txt': """[Results]
GT3 Class
1   045   Alice Driver    20  1:01.234
2   118   Bob Racer       20  1:01.876
3   007   Carol Speed     19  1:02.001
""",
    'Round 2 - Event 2.txt': """GT3 Class
1   045   Alice Driver    20  1:01.100
2   007   Carol Speed     20  1:01.950
GT4 Class
1   200   Dan Slow        18  1:10.870
""",
    'Round 3 - Event 3.txt': """GT3 Class
1   045   Alice Driver    21  1:00.999
2   118   Bob Racer       21  1:01.222
3   007   Carol Speed     20  1:02.500
4   033   Eve Late        DNF
""",
    'Round 4 - Event 4.txt': """GT3 Class
1   045   Alice Driver    20  1:01.500
2   118   Bob Racer       20  1:01.600
5   007   Carol Speed     20  1:03.000
""",
    'Round 5 - Event 5.txt': """GT3 Class
1   045   Alice Driver    20  1:01.500
3   118   Bob Racer       20  1:01.700
9   007   Carol Speed     17  1:09.000
""",
}


@pytest.fixture
def season_dir(tmp_path):
    """Create a season data directory with five rounds and some clutter."""
    data_dir = tmp_path / '2025-data'
    data_dir.mkdir()
    for name, content in ROUNDS.items():
        (data_dir / name).write_text(content, encoding='utf-8')

    # Placeholder for a round not raced yet
    (data_dir / 'Round 6 - Event 6.txt').write_text('', encoding='utf-8')
    # Last run's output
    (data_dir / 'output.csv').write_text('GT3\n,Alice Driver,40,10,10,10,10', encoding='utf-8')
    (data_dir / 'archive').mkdir()
    return data_dir


@pytest.fixture
def season_config(season_dir, tmp_path):
    """2025-style config pointed at the temporary data directory."""
    config = get_season_config(2025)
    config.data_dir = season_dir
    config.output_path = tmp_path / 'out' / '2025-results.csv'
    return config


class TestExtractEventId:
    """Tests for getting event ids from file names."""

    @pytest.mark.parametrize(
        'filename, expected',
        [
            ('Round 3 - Event 3.txt', 'event 3'),
            ('event 12 results.txt', 'event 12'),
            ('EVENT 7.txt', 'event 7'),
            ('event12.txt', 'event 12'),
            ('practice.txt', None),
            ('events.txt', None),
        ],
    )
    def test_extract(self, filename, expected):
        """Test event ids are found case-insensitively."""
        assert extract_event_id(filename) == expected


class TestReadEventDirectory:
    """Tests for loading a season's event files."""

    def test_reads_events_in_order(self, season_config):
        """Test every non-empty results file is keyed by event id."""
        events = read_event_directory(season_config)
        assert list(events) == ['event 1', 'event 2', 'event 3', 'event 4', 'event 5']
        assert events['event 2'] == {
            'GT3': {'Alice Driver': 10, 'Carol Speed': 9},
            'GT4': {'Dan Slow': 10},
        }

    def test_empty_file_skipped(self, season_config):
        """Test an empty results file isn't recorded as an event."""
        events = read_event_directory(season_config)
        assert 'event 6' not in events

    def test_lenient_rows_skipped(self, season_config):
        """Test the DNF row without a lap time doesn't score."""
        events = read_event_directory(season_config)
        assert 'Eve Late' not in events['event 3']['GT3']

    def test_double_digit_events_sort_numerically(self, tmp_path):
        """Test event 10 comes after event 9."""
        for number in (10, 9, 1):
            (tmp_path / f'event {number}.txt').write_text('GT3\n1 045 Alice\n', encoding='utf-8')
        config = SeasonConfig(data_dir=tmp_path, row_mode=RowMode.STRICT)
        assert list(read_event_directory(config)) == ['event 1', 'event 9', 'event 10']

    def test_missing_event_number(self, tmp_path):
        """Test a results file without an event number is an error."""
        (tmp_path / 'notes.txt').write_text('GT3\n1 045 Alice\n', encoding='utf-8')
        config = SeasonConfig(data_dir=tmp_path, row_mode=RowMode.STRICT)
        with pytest.raises(MissingEventIdentifierError) as exc_info:
            read_event_directory(config)
        assert exc_info.value.filename == 'notes.txt'

    def test_empty_file_without_event_number(self, tmp_path):
        """Test empty files are skipped before the file name is checked."""
        (tmp_path / 'notes.txt').write_text('  \n', encoding='utf-8')
        config = SeasonConfig(data_dir=tmp_path)
        assert read_event_directory(config) == {}

    def test_duplicate_event(self, tmp_path):
        """Test two files for the same event are rejected."""
        (tmp_path / 'event 1.txt').write_text('GT3\n1 045 Alice\n', encoding='utf-8')
        (tmp_path / 'Event 1 rerun.txt').write_text('GT3\n1 118 Bob\n', encoding='utf-8')
        config = SeasonConfig(data_dir=tmp_path, row_mode=RowMode.STRICT)
        with pytest.raises(DuplicateEventError) as exc_info:
            read_event_directory(config)
        assert exc_info.value.event_id == 'event 1'

    def test_csv_read_when_not_skipped(self, tmp_path):
        """Test skip_extensions controls which files are ignored."""
        (tmp_path / 'event 5.csv').write_text('GT3\n1 045 Alice\n', encoding='utf-8')
        skipping = SeasonConfig(data_dir=tmp_path, row_mode=RowMode.STRICT)
        reading = SeasonConfig(data_dir=tmp_path, row_mode=RowMode.STRICT, skip_extensions=())
        assert read_event_directory(skipping) == {}
        assert read_event_directory(reading) == {'event 5': {'GT3': {'Alice': 10}}}

    def test_missing_directory(self, tmp_path):
        """Test a data directory that doesn't exist."""
        config = SeasonConfig(data_dir=tmp_path / 'nope')
        with pytest.raises(FileNotFoundError):
            read_event_directory(config)

    def test_directory_is_a_file(self, tmp_path):
        """Test a data path pointing at a file."""
        path = tmp_path / 'event 1.txt'
        path.write_text('GT3\n', encoding='utf-8')
        with pytest.raises(NotADirectoryError):
            read_event_directory(SeasonConfig(data_dir=path))


class TestRunSeason:
    """Tests for the full pipeline."""

    def test_full_season(self, season_config):
        """Test standings with the best four of five results."""
        report = run_season(season_config)

        alice, bob, carol = report.standings['GT3']
        assert alice == DriverStanding('Alice Driver', [10, 10, 10, 10], 40)
        assert bob == DriverStanding('Bob Racer', [9, 9, 9, 8], 35)
        assert carol == DriverStanding('Carol Speed', [9, 8, 8, 6], 31)
        assert report.standings['GT4'] == [DriverStanding('Dan Slow', [10], 10)]
        assert report.warnings == []

    def test_csv_written(self, season_config):
        """Test the CSV file matches the report text."""
        report = run_season(season_config)
        expected = '\n'.join([
            'GT3',
            ',Alice Driver,40,10,10,10,10',
            ',Bob Racer,35,9,9,9,8',
            ',Carol Speed,31,9,8,8,6',
            'GT4',
            ',Dan Slow,10,10',
        ])
        assert report.csv_text == expected
        assert season_config.output_path.read_text(encoding='utf-8') == expected

    def test_count_every_result(self, season_config):
        """Test keep=0 totals every result in event order."""
        season_config.keep = 0
        report = run_season(season_config)
        carol = report.standings['GT3'][2]
        assert carol.scores == [8, 9, 8, 6, 2]
        assert carol.total == 33

    def test_empty_season(self, tmp_path):
        """Test a directory with no results produces an empty report."""
        data_dir = tmp_path / 'data'
        data_dir.mkdir()
        config = SeasonConfig(data_dir=data_dir, output_path=tmp_path / 'out.csv')
        report = run_season(config)
        assert report.events == {}
        assert report.csv_text == ''

    def test_malformed_file_aborts(self, season_config):
        """Test a bad row stops the run before anything is written."""
        (season_config.data_dir / 'Round 7 - Event 7.txt').write_text(
            'GT3 Class\n7\n', encoding='utf-8'
        )
        with pytest.raises(MalformedLineError):
            run_season(season_config)
        assert not season_config.output_path.exists()

    def test_warnings_reported(self, tmp_path, caplog):
        """Test validator warnings are logged and returned."""
        data_dir = tmp_path / 'data'
        data_dir.mkdir()
        (data_dir / 'event 1.txt').write_text('GT3\nGT4\n1 045 Alice\n', encoding='utf-8')
        config = SeasonConfig(
            data_dir=data_dir, output_path=tmp_path / 'out.csv', row_mode=RowMode.STRICT
        )
        with caplog.at_level(logging.WARNING, logger='racepoints'):
            report = run_season(config)
        assert report.warnings == ['event 1: class GT3 has no finishers']
        assert 'class GT3 has no finishers' in caplog.text

    def test_normalized_names_score_once_per_event(self, tmp_path):
        """Test a driver listed twice in different case gets one score."""
        data_dir = tmp_path / 'data'
        data_dir.mkdir()
        (data_dir / 'event 1.txt').write_text('GT3\n1 045 Alice\n2 046 alice\n', encoding='utf-8')
        (data_dir / 'event 2.txt').write_text('GT3\n1 045 ALICE\n', encoding='utf-8')
        config = SeasonConfig(
            data_dir=data_dir,
            output_path=tmp_path / 'out.csv',
            row_mode=RowMode.STRICT,
            keep=0,
            normalize_names=True,
        )
        report = run_season(config)
        assert report.standings == {'GT3': [DriverStanding('Alice', [9, 10], 19)]}

    def test_full_line_class_names(self, season_config):
        """Test classes can be named by the whole header line."""
        season_config.class_naming = ClassNaming.FULL_LINE
        report = run_season(season_config)
        assert list(report.standings) == ['GT3 Class', 'GT4 Class']


class TestConfig:
    """Tests for season presets and config files."""

    def test_presets(self):
        """Test the two season presets."""
        assert get_season_config(2024).keep == 0
        assert get_season_config(2024).row_mode == RowMode.STRICT
        assert get_season_config(2025).keep == 4
        assert get_season_config(2025).row_mode == RowMode.LENIENT
        assert get_season_config(2025).data_dir == Path('2025-data')

    def test_preset_copy(self):
        """Test changing a returned config leaves the preset alone."""
        config = get_season_config(2025)
        config.keep = 1
        config.score_table[1] = 50
        assert SEASON_PRESETS[2025].keep == 4
        assert SEASON_PRESETS[2025].score_table[1] == 10

    def test_unknown_season(self):
        """Test a season without a preset."""
        with pytest.raises(KeyError, match='2023'):
            get_season_config(2023)

    def test_load_config(self, tmp_path):
        """Test a JSON config file is validated and converted."""
        path = tmp_path / 'season.json'
        path.write_text(json.dumps({
            'data_dir': 'results/2026',
            'output_path': '2026-results.csv',
            'keep': 3,
            'row_mode': 'strict',
            'score_table': {'1': 25, '2': 18},
        }), encoding='utf-8')
        config = load_config(path)
        assert config.data_dir == Path('results/2026')
        assert config.keep == 3
        assert config.row_mode == RowMode.STRICT
        assert config.score_table == {1: 25, 2: 18}

    @pytest.mark.parametrize(
        'data',
        [
            {'keep': -1},
            {'score_table': {'0': 10}},
            {'score_table': {'1': -5}},
            {'row_mode': 'loose'},
            {'skip_extensions': ['csv']},
            {'unknown_field': True},
        ],
    )
    def test_invalid_config(self, tmp_path, data):
        """Test bad config values are rejected."""
        path = tmp_path / 'season.json'
        path.write_text(json.dumps(data), encoding='utf-8')
        with pytest.raises(ValueError):
            load_config(path)

    def test_missing_config(self, tmp_path):
        """Test a config file that doesn't exist."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'missing.json')


class TestSeasonReportCli:
    """Tests for the season_report command line."""

    def test_success(self, season_dir, tmp_path):
        """Test a clean run exits 0 and writes the CSV and sheet."""
        output = tmp_path / 'standings.csv'
        code = season_report.main([
            '--season', '2025',
            '--data-dir', str(season_dir),
            '--output', str(output),
            '--html',
            '--no-log-file',
        ])
        assert code == 0
        assert output.read_text(encoding='utf-8').startswith('GT3\n,Alice Driver,40,')
        assert (tmp_path / 'standings.sheet.html').exists()

    def test_overrides(self, season_dir, tmp_path):
        """Test command line options override the preset."""
        output = tmp_path / 'standings.csv'
        code = season_report.main([
            '--season', '2025',
            '--data-dir', str(season_dir),
            '--output', str(output),
            '--keep', '2',
            '--class-names', 'full-line',
            '--no-log-file',
        ])
        assert code == 0
        lines = output.read_text(encoding='utf-8').split('\n')
        assert lines[0] == 'GT3 Class'
        assert lines[1] == ',Alice Driver,20,10,10'

    def test_failure(self, tmp_path):
        """Test a malformed file exits 1."""
        data_dir = tmp_path / 'data'
        data_dir.mkdir()
        (data_dir / 'event 1.txt').write_text('GT3\n7\n', encoding='utf-8')
        code = season_report.main([
            '--data-dir', str(data_dir),
            '--output', str(tmp_path / 'out.csv'),
            '--no-log-file',
        ])
        assert code == 1
        assert not (tmp_path / 'out.csv').exists()

    def test_log_file(self, season_dir, tmp_path):
        """Test a log file is written to --log-dir."""
        log_dir = tmp_path / 'logs'
        code = season_report.main([
            '--data-dir', str(season_dir),
            '--output', str(tmp_path / 'out.csv'),
            '--log-dir', str(log_dir),
            '--quiet',
        ])
        assert code == 0
        assert len(list(log_dir.glob('racepoints_*.log'))) == 1


class TestSetupLogging:
    """Tests for the command-line logging setup."""

    def test_log_file_path(self, tmp_path):
        """Test log files are named by run timestamp."""
        path = log_file_path(tmp_path, now=datetime(2025, 3, 1, 18, 15, 0))
        assert path == tmp_path / 'racepoints_20250301_181500.log'

    def test_repeat_setup_replaces_handlers(self, tmp_path):
        """Test a second setup doesn't stack handlers."""
        setup_logging(log_dir=tmp_path, log_to_console=False)
        logger = setup_logging(log_dir=tmp_path, level=logging.DEBUG)
        assert len(logger.handlers) == 2
        assert all(h.level == logging.DEBUG for h in logger.handlers)
