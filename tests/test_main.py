"""
Tests for the command-line entry point.
"""

import json

import pytest

from greyhawk_weather.errors import ConfigError, GenerationCancelled
from greyhawk_weather.main import (
    WeatherConfig,
    create_config_from_args,
    load_state,
    main,
    parse_arguments,
    prompt_for_settings,
    run_generation,
    save_state,
)
from greyhawk_weather.tables.table_types import TerrainId
from greyhawk_weather.weather.calendar import CalendarDate
from greyhawk_weather.weather.orchestrator import ContinuityState
from greyhawk_weather.weather.precipitation import PrecipitationState
from greyhawk_weather.weather.temperature import ExtremeKind, TemperatureExtremeState


def _config(*argv):
    return create_config_from_args(parse_arguments(list(argv)))


class TestArguments:
    """Tests for argument parsing."""

    def test_defaults(self):
        config = _config()
        assert config.month == "Fireseek"
        assert config.day == 1
        assert config.year == 568
        assert config.latitude == 40
        assert config.terrain == "plains"
        assert config.days == 1
        assert config.use_record_temperatures
        assert config.enable_special_weather
        assert config.state_file is None

    def test_rule_flags(self):
        config = _config("--no-record-temperatures", "--no-special-weather", "--realistic-wind")
        flags = config.flags()
        assert not flags.use_record_temperatures
        assert not flags.enable_special_weather
        assert flags.use_realistic_wind

    def test_miles_north_sets_latitude(self):
        assert _config("--miles-north", "210").latitude == 38

    def test_miles_south_sets_latitude(self):
        assert _config("--miles-south", "140").latitude == 33

    def test_latitude_options_exclusive(self):
        with pytest.raises(SystemExit):
            parse_arguments(["--latitude", "40", "--miles-north", "70"])

    def test_default_latitude_also_exclusive(self, capsys):
        with pytest.raises(SystemExit):
            parse_arguments(["--miles-south", "70", "--latitude", "40"])

    def test_explicit_latitude(self):
        assert _config("--latitude", "40").latitude == 40
        assert _config("--latitude", "52").latitude == 52

    def test_unknown_terrain_rejected(self):
        with pytest.raises(SystemExit):
            parse_arguments(["--terrain", "tundra"])

    def test_terrain_slug(self):
        assert _config("--terrain", "sylvan-forest").location().terrain == TerrainId.SYLVAN_FOREST


class TestPrompt:
    """Tests for the interactive settings prompt."""

    def _answers(self, *answers):
        queue = list(answers)
        return lambda prompt: queue.pop(0)

    def test_answers_update_config(self, capsys):
        config = prompt_for_settings(
            WeatherConfig(), self._answers("Coldeven", "5", "", "forest", "45", "1000")
        )
        assert config.month == "Coldeven"
        assert config.day == 5
        assert config.year == 568
        assert config.terrain == "forest"
        assert config.latitude == 45
        assert config.elevation_feet == 1000

    def test_quit(self, capsys):
        with pytest.raises(GenerationCancelled):
            prompt_for_settings(WeatherConfig(), self._answers("Coldeven", "q"))

    def test_end_of_input(self, capsys):
        def closed(prompt):
            raise EOFError

        with pytest.raises(GenerationCancelled) as excinfo:
            prompt_for_settings(WeatherConfig(), closed)
        assert excinfo.value.__cause__ is None
        assert excinfo.value.__suppress_context__

    def test_interrupt(self, capsys):
        def interrupted(prompt):
            raise KeyboardInterrupt

        with pytest.raises(GenerationCancelled) as excinfo:
            prompt_for_settings(WeatherConfig(), interrupted)
        assert excinfo.value.__suppress_context__

    def test_bad_number(self, capsys):
        with pytest.raises(ConfigError):
            prompt_for_settings(WeatherConfig(), self._answers("Coldeven", "fifth"))


class TestStateFile:
    """Continuity state persists as JSON between runs."""

    def test_missing_file_gives_fresh_state(self, tmp_path):
        assert load_state(None) == ContinuityState()
        assert load_state(tmp_path / "weather.json") == ContinuityState()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "weather.json"
        state = ContinuityState(
            extremes=TemperatureExtremeState(ExtremeKind.RECORD_HIGH, 2),
            precipitation=PrecipitationState(active=True, type_index=10, remaining_duration=4),
        )
        save_state(path, state)
        assert json.loads(path.read_text(encoding="utf-8"))["extremes"]["kind"] == "Record high"
        assert load_state(path) == state

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[1, 2]",
            '{"extremes": {"kind": "Mild", "remaining_days": 2}}',
            '{"precipitation": {"active": true, "type_index": 3, "special_event": "Meteors"}}',
            '{"precipitation": {"active": true, "type_index": "three"}}',
            '{"extremes": "hot"}',
        ],
    )
    def test_bad_state_file(self, tmp_path, content):
        path = tmp_path / "weather.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_state(path)

    def test_bad_state_file_exit_code(self, tmp_path, capsys):
        path = tmp_path / "weather.json"
        path.write_text("{not json", encoding="utf-8")
        assert main(["--state-file", str(path)]) == 2


class TestRunGeneration:
    """Tests for multi-day generation."""

    def test_consecutive_days(self):
        results = run_generation(WeatherConfig(days=3, seed=8))
        assert [r.report.date for r in results] == [
            CalendarDate("Fireseek", 1),
            CalendarDate("Fireseek", 2),
            CalendarDate("Fireseek", 3),
        ]

    def test_days_cross_festival(self):
        results = run_generation(WeatherConfig(month="Needfest", day=7, days=2, seed=8))
        assert results[-1].report.date == CalendarDate("Fireseek", 1)

    def test_seed_reproduces_run(self):
        first = run_generation(WeatherConfig(days=5, seed=21))
        second = run_generation(WeatherConfig(days=5, seed=21))
        assert [r.report for r in first] == [r.report for r in second]

    def test_invalid_location(self):
        with pytest.raises(ConfigError):
            run_generation(WeatherConfig(latitude=95))


class TestMain:
    """Tests for the main entry point."""

    def test_json_output(self, capsys):
        assert main(["--seed", "1", "--json", "--days", "2"]) == 0
        reports = json.loads(capsys.readouterr().out)
        assert len(reports) == 2
        assert reports[1]["date"]["day"] == 2

    def test_text_output(self, capsys):
        assert main(["--seed", "1", "--month", "Wealsun", "--terrain", "desert"]) == 0
        out = capsys.readouterr().out
        assert "GREYHAWK WEATHER" in out
        assert "Weather for Starday, 1 Wealsun, 568 CY (Low Summer)" in out

    def test_invalid_day(self, capsys):
        assert main(["--month", "Needfest", "--day", "9"]) == 2

    def test_state_file_written(self, tmp_path, capsys):
        path = tmp_path / "weather.json"
        assert main(["--seed", "3", "--state-file", str(path)]) == 0
        assert set(json.loads(path.read_text(encoding="utf-8"))) == {"extremes", "precipitation"}
        assert main(["--seed", "4", "--state-file", str(path), "--day", "2"]) == 0
