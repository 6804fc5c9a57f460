import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pontgen.codegen.codegen import Codegen
from pontgen.config import get_config
from pontgen.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    OutputError,
    SchemaLoadError,
    TemplateError,
)

console = Console()
app = typer.Typer(
    name='pontgen',
    help='Generate Python API clients from remote API descriptions',
    no_args_is_help=True,
)

ConfigOption = Annotated[
    str | None,
    typer.Option('--config', '-c', help='Path to configuration file (JSON or YAML)'),
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    config: ConfigOption = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug logging')
    ] = False,
) -> None:
    """Generate client modules for every configured data source.

    If no config file is specified, pont-config.json, pont.yaml or a
    [tool.pontgen] table in pyproject.toml is looked up in the current
    directory, then pont-config.json in its sub-directories.

    A data source whose description cannot be loaded, or whose names
    collide, is reported and skipped; the others are still generated.

    Examples:
        pontgen generate
        pontgen generate --config pont.yaml
    """
    _setup_logging(verbose)

    try:
        codegen_config, config_dir = get_config(config)
        data_sources = codegen_config.get_data_sources_config(config_dir)
    except ConfigurationError as e:
        console.print(f'[red]Configuration error:[/red] {e}')
        raise typer.Exit(1)

    failed = []

    for data_source in data_sources:
        codegen = Codegen(data_source)

        with Progress(
            SpinnerColumn(),
            TextColumn('[progress.description]{task.description}'),
            console=console,
        ) as progress:
            task = progress.add_task(
                f'Generating code for {codegen.label} in {data_source.output_dir}...',
                total=None,
            )

            try:
                written_files = codegen.generate()
            except (SchemaLoadError, CodeGenerationError) as e:
                progress.update(task, description=f'Failed to generate {codegen.label}')
                console.print(f'[red]Error:[/red] {e}')
                failed.append(codegen.label)
                continue
            except (TemplateError, ConfigurationError, OutputError) as e:
                console.print(f'[red]Error:[/red] {e}')
                raise typer.Exit(1)

            progress.update(
                task, description=f'Code generation completed for {codegen.label}!'
            )

        console.print('[dim]Generated files:[/dim]')
        for path in written_files:
            console.print(f'  - {path}')

    if failed:
        console.print(f'[red]Generation failed for:[/red] {", ".join(failed)}')
        raise typer.Exit(1)

    console.print('[green]Successfully generated code[/green]')


@app.command()
def check(config: ConfigOption = None) -> None:
    """Validate the configuration and show the resolved data sources."""
    try:
        codegen_config, config_dir = get_config(config)
        data_sources = codegen_config.get_data_sources_config(config_dir)
    except ConfigurationError as e:
        console.print(f'[red]Configuration error:[/red] {e}')
        raise typer.Exit(1)

    table = Table(title='Data sources')
    table.add_column('Name')
    table.add_column('Origin')
    table.add_column('Output')
    table.add_column('Template')
    table.add_column('Operation ids')
    table.add_column('Tagged by name')

    for data_source in data_sources:
        table.add_row(
            data_source.name or '-',
            data_source.origin_url,
            str(data_source.output_dir),
            data_source.template_path or 'default',
            str(data_source.using_operation_id),
            str(data_source.tagged_by_name),
        )

    console.print(table)
    console.print('[green]Configuration is valid[/green]')


@app.command()
def version() -> None:
    """Show the version of pontgen."""
    from pontgen import __version__

    console.print(f'pontgen version: {__version__}')


if __name__ == '__main__':
    app()
