"""Tests for wl_color_picker.config — layered loading and validation."""

from pathlib import Path

import pytest
from wl_color_picker.config import (
    Config,
    ConfigError,
    config_defaults,
    config_to_dict,
    load_config,
    parse_delay,
    split_destinations,
    validate_config_dict,
    validate_config_file,
)


class TestParseDelay:
    @pytest.mark.parametrize('text, expected', [('1', 1.0), ('0.5', 0.5), ('.25', 0.25), ('10', 10.0)])
    def test_valid_text(self, text, expected):
        assert parse_delay(text) == expected

    @pytest.mark.parametrize('text', ['abc', '', '-1', '1.', '1e3', '1.2.3', ' 1'])
    def test_invalid_text(self, text):
        with pytest.raises(ConfigError):
            parse_delay(text)

    def test_numbers(self):
        assert parse_delay(2) == 2.0
        assert parse_delay(0.1) == 0.1

    def test_negative_number(self):
        with pytest.raises(ConfigError):
            parse_delay(-0.5)

    def test_bool_rejected(self):
        with pytest.raises(ConfigError):
            parse_delay(True)

    @pytest.mark.parametrize('value', ['99999999999999999999999', float('inf'), float('nan'), 10**400, 1e300])
    def test_unsleepable_rejected(self, value):
        with pytest.raises(ConfigError):
            parse_delay(value)


class TestSplitDestinations:
    def test_order_kept(self):
        assert split_destinations('clipboard,stdout') == ('clipboard', 'stdout')

    def test_trailing_comma(self):
        assert split_destinations('stdout,') == ('stdout',)

    def test_inner_empty_kept(self):
        assert split_destinations('stdout,,clipboard') == ('stdout', '', 'clipboard')

    def test_empty(self):
        assert split_destinations('') == ()

    def test_list(self):
        assert split_destinations(['stdout', 'clipboard']) == ('stdout', 'clipboard')


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config == Config()
        assert config.destinations == ('stdout',)
        assert config.delay == 1.0

    def test_file_values(self, isolated_env: Path):
        isolated_env.write_text('dest: clipboard\nnotify: true\ndelay: 0.2\nzenity: /opt/zenity\n')
        config = load_config()
        assert config.destinations == ('clipboard',)
        assert config.notify is True
        assert config.delay == 0.2
        assert config.zenity == '/opt/zenity'

    def test_explicit_path(self, tmp_path: Path):
        path = tmp_path / 'other.yaml'
        path.write_text('picker: true\n')
        assert load_config(config_path=path).picker is True

    def test_file_bool_strings(self, isolated_env: Path):
        isolated_env.write_text('picker: "false"\nnotify: "yes"\nname_lookup: "off"\n')
        config = load_config()
        assert config.picker is False
        assert config.notify is True
        assert config.name_lookup is False

    def test_infinite_delay_in_file(self, isolated_env: Path):
        isolated_env.write_text('delay: .inf\n')
        with pytest.raises(ConfigError):
            load_config()

    def test_broken_file_ignored(self, isolated_env: Path):
        isolated_env.write_text('dest: [unclosed\n')
        assert load_config() == Config()

    def test_env_overrides_file(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch):
        isolated_env.write_text('dest: clipboard\n')
        monkeypatch.setenv('WL_COLOR_PICKER_DEST', 'stdout,clipboard')
        monkeypatch.setenv('WL_COLOR_PICKER_NOTIFY', 'yes')
        monkeypatch.setenv('WL_COLOR_PICKER_CAPTURE_TIMEOUT', '3')
        config = load_config()
        assert config.destinations == ('stdout', 'clipboard')
        assert config.notify is True
        assert config.capture_timeout == 3.0

    def test_legacy_api_toggle(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('WL_PICKER_API', '1')
        assert load_config().name_lookup is True

    def test_legacy_api_toggle_other_value(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('WL_PICKER_API', 'yes')
        assert load_config().name_lookup is False

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('WL_COLOR_PICKER_PICKER', 'true')
        config = load_config(overrides={'picker': False, 'dest': 'clipboard', 'notify': None})
        assert config.picker is False
        assert config.destinations == ('clipboard',)
        assert config.notify is False

    def test_empty_destination_rejected(self):
        with pytest.raises(ConfigError):
            load_config(overrides={'dest': ''})

    def test_invalid_delay_rejected(self, isolated_env: Path):
        isolated_env.write_text('delay: soon\n')
        with pytest.raises(ConfigError):
            load_config()

    def test_unknown_destination_deferred(self):
        # rejected only when the color is written out
        assert load_config(overrides={'dest': 'stdout,bogus'}).destinations == ('stdout', 'bogus')


class TestValidation:
    def test_defaults_are_valid(self):
        assert validate_config_dict(config_defaults()) == []

    def test_not_a_mapping(self):
        assert validate_config_dict(['dest']) == ['Config must be a mapping/object']

    def test_unknown_key(self):
        assert 'Unknown config key: colour' in validate_config_dict({'colour': 'red'})

    def test_wrong_types(self):
        errors = validate_config_dict({'picker': 'yes', 'delay': 'soon', 'slurp': 3})
        assert 'picker must be a boolean' in errors
        assert 'delay must be a number' in errors
        assert 'slurp must be a string' in errors

    def test_negative_delay(self):
        assert validate_config_dict({'delay': -1}) == ['delay must be >= 0']

    def test_infinite_delay(self):
        assert validate_config_dict({'delay': float('inf')}) == ['delay must be a finite number']

    def test_bad_destination(self):
        errors = validate_config_dict({'dest': 'stdout,printer'})
        assert len(errors) == 1
        assert 'printer' in errors[0]

    def test_missing_file_is_valid(self, tmp_path: Path):
        assert validate_config_file(tmp_path / 'missing.yaml') == []

    def test_unparseable_file(self, tmp_path: Path):
        path = tmp_path / 'bad.yaml'
        path.write_text('- a\n- b\n')
        with pytest.raises(ValueError):
            validate_config_file(path)


class TestConfigToDict:
    def test_round_trip_keys(self):
        assert set(config_to_dict(Config())) == set(config_defaults())

    def test_dest_joined(self):
        assert config_to_dict(Config(destinations=('stdout', 'clipboard')))['dest'] == 'stdout,clipboard'
