import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from flatapi.config import DocumentConfig, get_config
from flatapi.exceptions import FlatAPIError
from flatapi.flatten import InlineModelResolver
from flatapi.flatten.inline_model_resolver import FlattenResult
from flatapi.loader import SchemaLoader
from flatapi.writer import DocumentWriter

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name='flatapi',
    help='Promote inline schemas in OpenAPI documents to named definitions',
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Enable debug logging')
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _print_result(result: FlattenResult) -> None:
    if result.created:
        console.print('[dim]Promoted definitions:[/dim]')
        for name in result.created:
            console.print(f'  - {name}')
    else:
        console.print('[dim]No inline schemas to promote.[/dim]')
    for warning in result.warnings:
        console.print(f'[yellow]Warning:[/yellow] {warning}')


@app.command()
def flatten(
    source: Annotated[str, typer.Argument(help='Path or URL of the OpenAPI document')],
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help='Write the flattened document here'),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option('--format', '-f', help='Output format: json or yaml'),
    ] = None,
    resolve_external_refs: Annotated[
        bool,
        typer.Option('--resolve-external-refs', help='Inline external $ref targets'),
    ] = False,
) -> None:
    """Flatten a single OpenAPI document.

    Without --output the flattened document is printed to stdout.

    Examples:
        flatapi flatten ./api.yaml -o ./api.flat.yaml
        flatapi flatten https://api.example.com/openapi.json --format yaml
    """
    if output_format not in (None, 'json', 'yaml'):
        console.print(f'[red]Error:[/red] unsupported format {output_format!r}')
        raise typer.Exit(2)

    try:
        document = SchemaLoader(resolve_external_refs=resolve_external_refs).load(source)
        result = InlineModelResolver().flatten(document)
        writer = DocumentWriter()
        if output is None:
            typer.echo(writer.dumps(document, output_format or 'json'), nl=False)
            return
        writer.write(document, output, output_format)
    except FlatAPIError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    _print_result(result)
    console.print(f'[green]Flattened document written to {output}[/green]')


@app.command()
def run(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
) -> None:
    """Flatten every document listed in the configuration.

    If no config file is specified, flat.yaml / flat.yml in the current
    directory or the [tool.flatapi] table of pyproject.toml is used.

    Examples:
        flatapi run
        flatapi run --config my-config.yaml
    """
    try:
        settings = get_config(config)
        loader = SchemaLoader(resolve_external_refs=settings.resolve_external_refs)

        for document_config in settings.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Flattening {document_config.source} into {document_config.output}...',
                    total=None,
                )
                result = _flatten_document(loader, document_config)
                progress.update(
                    task, description=f'Flattened {document_config.source}!'
                )
            _print_result(result)

    except FlatAPIError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    console.print('[green]All documents flattened.[/green]')


def _flatten_document(loader: SchemaLoader, document_config: DocumentConfig) -> FlattenResult:
    document = loader.load(document_config.source)
    result = InlineModelResolver().flatten(document)
    DocumentWriter().write(document, document_config.output, document_config.output_format)
    return result


@app.command()
def version() -> None:
    """Show the version of flatapi."""
    from flatapi import __version__

    console.print(f'flatapi version: {__version__}')


if __name__ == '__main__':
    app()
