import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from pontgen.codegen.template import get_registered_templates
from pontgen.codegen.utils import look_for_files
from pontgen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_FILENAMES = ['pont-config.json', 'pont.yaml', 'pont.yml']


class OriginConfig(BaseModel):
    """One named API description source overriding the common settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    origin_url: str = Field('', description='URL or path of the API description.')

    name: str = Field(
        '', description='Name of the origin, used as output sub-directory.'
    )

    using_operation_id: bool | None = Field(
        None, description='Name operations after their operation id.'
    )


class DataSourceConfig(BaseModel):
    """Fully resolved settings driving one generation run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    origin_url: str
    name: str | None = None
    using_operation_id: bool = False
    tagged_by_name: bool = True
    template_path: str | None = None
    out_dir: str = 'src/service'
    formatter_options: dict[str, Any] = Field(default_factory=dict)

    @property
    def output_dir(self) -> Path:
        """Directory the generated modules of this source are written to."""
        if self.name:
            return Path(self.out_dir) / self.name
        return Path(self.out_dir)


class Config(BaseSettings):
    """Top-level configuration as read from ``pont-config.json``.

    Either ``origin_url`` describes a single source, or ``origins`` lists
    several. When ``origins`` is non-empty the single-origin field is
    ignored.
    """

    model_config = SettingsConfigDict(
        env_prefix='PONTGEN_',
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )

    origin_url: str = Field('', description='URL or path of the API description.')

    using_operation_id: bool = Field(
        False, description='Name operations after their operation id.'
    )

    tagged_by_name: bool = Field(
        True, description='Group operations into modules by tag name.'
    )

    out_dir: str = Field(
        'service', description='Output directory, relative to the config file.'
    )

    origins: list[OriginConfig] = Field(
        default_factory=list, description='Several named API description sources.'
    )

    template_path: str | None = Field(
        None,
        description='Python template file, relative to the config file. '
        'The built-in template is used when unset.',
    )

    formatter_options: dict[str, Any] = Field(
        default_factory=dict, description='Options passed through to black.Mode.'
    )

    def validate_config(self) -> None:
        """Check that every source has what a generation run needs.

        Raises:
            ConfigurationError: Naming the first missing field, e.g.
                ``origins[1].originUrl``.
        """
        if self.origins:
            for index, origin in enumerate(self.origins):
                if not origin.origin_url:
                    raise ConfigurationError(
                        'Missing origin url', field=f'origins[{index}].originUrl'
                    )
                if not origin.name:
                    raise ConfigurationError(
                        'Missing origin name', field=f'origins[{index}].name'
                    )
        elif not self.origin_url:
            raise ConfigurationError(
                'Missing url of the remote API description', field='originUrl'
            )

    @classmethod
    def create_from_config_path(cls, config_path: str | Path) -> 'Config':
        """Load a configuration file (JSON, YAML or ``pyproject.toml``)."""
        config_path = Path(config_path)

        try:
            content = config_path.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigurationError(
                f'Cannot read configuration: {e}', config_path=str(config_path)
            )

        try:
            if config_path.name == 'pyproject.toml':
                import tomllib

                data = tomllib.loads(content).get('tool', {}).get('pontgen')
            elif config_path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f'Configuration is not valid: {e}', config_path=str(config_path)
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                'Configuration must be a mapping', config_path=str(config_path)
            )

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(str(e), config_path=str(config_path))

    def _resolve_template_path(self, config_dir: str | Path) -> str | None:
        if not self.template_path or self.template_path in get_registered_templates():
            return self.template_path
        return str(Path(config_dir) / self.template_path)

    def _common_fields(self, config_dir: str | Path) -> dict[str, Any]:
        return {
            'using_operation_id': self.using_operation_id,
            'tagged_by_name': self.tagged_by_name,
            'out_dir': str(Path(config_dir) / self.out_dir),
            'template_path': self._resolve_template_path(config_dir),
            'formatter_options': dict(self.formatter_options),
        }

    def get_data_sources_config(self, config_dir: str | Path) -> list[DataSourceConfig]:
        """Resolve one :class:`DataSourceConfig` per origin.

        Fields set on an origin take precedence over the common fields; the
        others are inherited.
        """
        self.validate_config()
        common = self._common_fields(config_dir)

        if self.origins:
            return [
                DataSourceConfig(
                    **{**common, **origin.model_dump(exclude_unset=True, exclude_none=True)}
                )
                for origin in self.origins
            ]

        return [DataSourceConfig(**common, origin_url=self.origin_url)]


def find_config_path(
    path: str | Path | None = None, search_dir: str | Path | None = None
) -> Path:
    """Locate the configuration file.

    An explicit ``path`` wins. Otherwise the default file names and a
    ``pyproject.toml`` with a ``[tool.pontgen]`` table are looked up in
    ``search_dir`` (the working directory by default), then sub-directories
    are searched for ``pont-config.json``.
    """
    if path:
        path = Path(path)
        if not path.exists():
            raise ConfigurationError('Configuration file not found', config_path=str(path))
        return path

    search_dir = Path(search_dir or os.getcwd())

    for filename in DEFAULT_FILENAMES:
        candidate = search_dir / filename
        if candidate.exists():
            return candidate

    pyproject = search_dir / 'pyproject.toml'
    if pyproject.exists():
        import tomllib

        try:
            tools = tomllib.loads(pyproject.read_text(encoding='utf-8')).get('tool', {})
        except tomllib.TOMLDecodeError as e:
            logger.warning(f'Ignoring unreadable {pyproject}: {e}')
            tools = {}

        if 'pontgen' in tools:
            return pyproject

    found = look_for_files(search_dir, DEFAULT_FILENAMES[0])
    if found:
        logger.debug(f'Found configuration at {found}')
        return found

    raise ConfigurationError(f'No configuration found under {search_dir}')


def get_config(path: str | Path | None = None) -> tuple[Config, Path]:
    """Load the configuration and return it with the directory it lives in."""
    config_path = find_config_path(path)
    return Config.create_from_config_path(config_path), config_path.parent
