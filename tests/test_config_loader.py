"""Tests for configuration loading, merging and validation."""

import argparse

import pytest
import yaml

from config_loader import DEFAULT_CONFIG, ConfigLoader, deep_merge, get_nested


def args(**overrides):
    values = {'output_dir': None, 'url': None, 'log_file': None, 'verbose': 0}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestLoad:
    """Test YAML loading over defaults."""

    def test_missing_optional_file_uses_defaults(self, tmp_path):
        config = ConfigLoader.load(str(tmp_path / "absent.yaml"))
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_missing_required_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / "absent.yaml"), required=True)

    def test_partial_file_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("export:\n  output_directory: out\n", encoding='utf-8')
        config = ConfigLoader.load(str(path))
        assert config['export']['output_directory'] == 'out'
        assert config['export']['encoding'] == 'utf-8'
        assert config['title']['product_names'] == ['ChatGPT']

    def test_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv('TRANSCRIPT_DIR', '/tmp/transcripts')
        path = tmp_path / "config.yaml"
        path.write_text("export:\n  output_directory: ${TRANSCRIPT_DIR}\nsession:\n  url: ${UNSET_VAR_XYZ}\n")
        config = ConfigLoader.load(str(path))
        assert config['export']['output_directory'] == '/tmp/transcripts'
        assert config['session']['url'] == '${UNSET_VAR_XYZ}'

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert ConfigLoader.load(str(path)) == DEFAULT_CONFIG

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            ConfigLoader.load(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("export: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            ConfigLoader.load(str(path))


class TestValidate:
    """Test configuration validation."""

    def test_defaults_valid(self):
        ConfigLoader.validate(ConfigLoader.merge_with_args(DEFAULT_CONFIG, args()))

    @pytest.mark.parametrize("path,value", [
        ('title.product_names', 'ChatGPT'),
        ('title.product_names', [1]),
        ('roles.text_prefix_heuristic', 'yes'),
        ('export.output_directory', ''),
        ('export.encoding', ''),
        ('session.poll_interval', 0),
        ('session.poll_interval', True),
        ('logging.level', 'LOUD'),
    ])
    def test_invalid_values(self, path, value):
        config = ConfigLoader.merge_with_args(DEFAULT_CONFIG, args())
        section, key = path.split('.')
        config[section][key] = value
        with pytest.raises(ValueError):
            ConfigLoader.validate(config)

    def test_output_directory_is_file(self, tmp_path):
        existing = tmp_path / "file.txt"
        existing.write_text("x")
        config = ConfigLoader.merge_with_args(DEFAULT_CONFIG, args(output_dir=str(existing)))
        with pytest.raises(ValueError):
            ConfigLoader.validate(config)


class TestMergeWithArgs:
    """Test CLI precedence."""

    def test_cli_overrides(self):
        merged = ConfigLoader.merge_with_args(
            DEFAULT_CONFIG, args(output_dir='out', url='https://x', log_file='run.log', verbose=2)
        )
        assert merged['export']['output_directory'] == 'out'
        assert merged['session']['download_directory'] == 'out'
        assert merged['session']['url'] == 'https://x'
        assert merged['logging']['file'] == 'run.log'
        assert merged['logging']['level'] == 'DEBUG'
        assert DEFAULT_CONFIG['export']['output_directory'] == '.'

    def test_verbose_info(self):
        assert ConfigLoader.merge_with_args({}, args(verbose=1))['logging']['level'] == 'INFO'


class TestHelpers:
    """Test dictionary helpers."""

    def test_deep_merge(self):
        target = {'a': {'b': 1, 'c': 2}, 'd': 1}
        deep_merge(target, {'a': {'c': 3}, 'd': {'e': 4}})
        assert target == {'a': {'b': 1, 'c': 3}, 'd': {'e': 4}}

    def test_get_nested(self):
        config = {'a': {'b': {'c': 1}}}
        assert get_nested(config, 'a.b.c') == 1
        assert get_nested(config, 'a.x', 'default') == 'default'
        assert get_nested(config, 'a.b.c.d') is None
