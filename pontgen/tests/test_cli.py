"""Test CLI functionality."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from pontgen.cli import app
from pontgen.config import Config, OriginConfig
from pontgen.exceptions import (
    ConfigurationError,
    NamingCollisionError,
    SchemaLoadError,
    TemplateError,
)

from .fixtures import SWAGGER_SPEC


@pytest.fixture
def runner():
    """Fixture providing CLI test runner."""
    return CliRunner()


@pytest.fixture
def multi_origin_config():
    """Fixture providing a configuration with two named origins."""
    config = Config(
        origins=[
            OriginConfig(origin_url='https://api.example.com/shop', name='shop'),
            OriginConfig(origin_url='https://api.example.com/auth', name='auth'),
        ]
    )
    return config, Path('/project')


def codegen_mock(label, written_files=None, error=None):
    instance = MagicMock()
    instance.label = label
    if error is not None:
        instance.generate.side_effect = error
    else:
        instance.generate.return_value = written_files or []
    return instance


class TestGenerateCommand:
    """Test the generate command."""

    @patch('pontgen.cli.get_config')
    @patch('pontgen.cli.Codegen')
    def test_generate_every_origin(
        self, mock_codegen_class, mock_get_config, runner, multi_origin_config
    ):
        """Test that one Codegen runs per data source."""
        mock_get_config.return_value = multi_origin_config
        mock_codegen_class.side_effect = [
            codegen_mock('shop', ['/project/service/shop/pet.py']),
            codegen_mock('auth', ['/project/service/auth/login.py']),
        ]

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 0
        mock_get_config.assert_called_once_with(None)
        names = [c.args[0].name for c in mock_codegen_class.call_args_list]
        assert names == ['shop', 'auth']
        assert 'pet.py' in result.stdout
        assert 'login.py' in result.stdout
        assert 'Successfully generated code' in result.stdout

    @patch('pontgen.cli.get_config')
    @patch('pontgen.cli.Codegen')
    def test_generate_with_short_config_option(
        self, mock_codegen_class, mock_get_config, runner, multi_origin_config
    ):
        """Test generate command with short config option."""
        mock_get_config.return_value = multi_origin_config
        mock_codegen_class.side_effect = [codegen_mock('shop'), codegen_mock('auth')]

        result = runner.invoke(app, ['generate', '-c', 'pont.yaml'])

        assert result.exit_code == 0
        mock_get_config.assert_called_once_with('pont.yaml')

    @patch('pontgen.cli.get_config')
    def test_generate_config_error(self, mock_get_config, runner):
        """Test generate command with configuration error."""
        mock_get_config.side_effect = ConfigurationError(
            'No config file found', field='originUrl'
        )

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        assert 'Configuration error' in result.stdout

    @patch('pontgen.cli.get_config')
    @patch('pontgen.cli.Codegen')
    def test_failing_origin_does_not_stop_others(
        self, mock_codegen_class, mock_get_config, runner, multi_origin_config
    ):
        """Test that a collision in one origin still generates the next one."""
        mock_get_config.return_value = multi_origin_config
        auth = codegen_mock('auth', ['/project/service/auth/login.py'])
        mock_codegen_class.side_effect = [
            codegen_mock(
                'shop',
                error=NamingCollisionError('list', "'GET /a'", "'GET /b'", "module 'x'"),
            ),
            auth,
        ]

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        auth.generate.assert_called_once()
        assert 'login.py' in result.stdout
        assert 'Generation failed for' in result.stdout
        assert 'Successfully generated code' not in result.stdout

    @patch('pontgen.cli.get_config')
    @patch('pontgen.cli.Codegen')
    def test_unreachable_origin(
        self, mock_codegen_class, mock_get_config, runner, multi_origin_config
    ):
        mock_get_config.return_value = multi_origin_config
        mock_codegen_class.side_effect = [
            codegen_mock('shop'),
            codegen_mock('auth', error=SchemaLoadError('https://api.example.com/auth')),
        ]

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        assert 'auth' in result.stdout

    @patch('pontgen.cli.get_config')
    @patch('pontgen.cli.Codegen')
    def test_template_error_aborts_run(
        self, mock_codegen_class, mock_get_config, runner, multi_origin_config
    ):
        """Test that a broken template stops before the next origin."""
        mock_get_config.return_value = multi_origin_config
        auth = codegen_mock('auth')
        mock_codegen_class.side_effect = [
            codegen_mock('shop', error=TemplateError('serviceTemplate.py')),
            auth,
        ]

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        auth.generate.assert_not_called()


class TestCheckCommand:
    """Test the check command."""

    @patch('pontgen.cli.get_config')
    def test_check_lists_data_sources(self, mock_get_config, runner, multi_origin_config):
        mock_get_config.return_value = multi_origin_config

        result = runner.invoke(app, ['check'])

        assert result.exit_code == 0
        assert 'shop' in result.stdout
        assert 'auth' in result.stdout
        assert 'Configuration is valid' in result.stdout

    @patch('pontgen.cli.get_config')
    def test_check_missing_origin_name(self, mock_get_config, runner):
        config = Config(origins=[OriginConfig(origin_url='https://api.example.com/a')])
        mock_get_config.return_value = (config, Path('/project'))

        result = runner.invoke(app, ['check'])

        assert result.exit_code == 1
        assert 'Configuration error' in result.stdout


class TestVersionCommand:
    """Test the version command."""

    def test_version(self, runner):
        with patch('pontgen.__version__', '1.2.3'):
            result = runner.invoke(app, ['version'])

        assert result.exit_code == 0
        assert 'pontgen version: 1.2.3' in result.stdout


class TestCLIWithRealFiles:
    """Test CLI with real configuration and description files."""

    def test_generate_from_config_file(self, runner, tmp_path, monkeypatch):
        """Test that relative origins resolve against the working directory."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / 'api-docs.json').write_text(json.dumps(SWAGGER_SPEC))
        config_path = tmp_path / 'pont-config.json'
        config_path.write_text(
            json.dumps({'originUrl': './api-docs.json', 'outDir': 'service'})
        )

        result = runner.invoke(app, ['generate', '--config', str(config_path)])

        assert result.exit_code == 0, result.stdout
        assert (tmp_path / 'service' / 'pet.py').exists()
        assert (tmp_path / 'service' / '__init__.py').exists()

    def test_generate_with_nonexistent_config_file(self, runner, tmp_path):
        result = runner.invoke(
            app, ['generate', '--config', str(tmp_path / 'nonexistent.json')]
        )

        assert result.exit_code == 1
