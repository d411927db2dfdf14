"""
Command-line interface for antdoc.
"""
import sys
import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import click
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler

from antdoc import __version__
from antdoc.analysis import ExternalAntdocs, LinkResolver, ModelBuilder
from antdoc.config import DocletOptions, parse_path
from antdoc.core import AntlibError, DeclarationStore, Diagnostics, TypeGroupRegistry
from antdoc.parsers import JavaParser
from antdoc.render import HtmlRenderer


# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger("antdoc")
console = Console()


def model_options(f):
    """Options shared by all commands that build the model."""
    decorators = [
        click.argument('sources', nargs=-1, required=True, type=click.Path(exists=True)),
        click.option('--antlib-file', 'antlib_files', multiple=True, type=click.Path(),
                     help='ANTLIB file to document (repeatable)'),
        click.option('--antlib-resource', 'antlib_resources', multiple=True,
                     help='ANTLIB resource to document, e.g. "com/acme/antlib.xml" (repeatable)'),
        click.option('--sourcepath', default=None, help='Where to look for ANTLIB resources first'),
        click.option('--classpath', default=None, help='Where to look for ANTLIB resources next'),
        click.option('--external-antdocs', 'external_antdocs', multiple=True, type=click.Path(exists=True),
                     help='Properties file "qualified.ClassName = label href" (repeatable)'),
        click.option('--no-bundled-externals', is_flag=True, help='Do not link to the Ant manual by default'),
        click.option('--quiet', '-q', is_flag=True, help='Only report warnings and errors'),
    ]
    for decorator in reversed(decorators):
        f = decorator(f)
    return f


def make_options(antlib_files=(), antlib_resources=(), external_antdocs=(), no_bundled_externals=False,
                 sourcepath=None, classpath=None, **kwargs) -> DocletOptions:
    """Collect the command line options of a command into DocletOptions."""
    options = DocletOptions(
        antlib_files=[Path(p) for p in antlib_files],
        antlib_resources=list(antlib_resources),
        external_antdocs=[Path(p) for p in external_antdocs],
        use_bundled_externals=not no_bundled_externals,
        class_path=parse_path(classpath),
        **{k: v for k, v in kwargs.items() if v is not None},
    )
    if parse_path(sourcepath):
        options.source_path = parse_path(sourcepath)
    return options


def build_model(sources, options: DocletOptions,
                diagnostics: Diagnostics) -> Tuple[DeclarationStore, TypeGroupRegistry, LinkResolver]:
    """
    Parse the Java sources, build the ANT type model and prepare link resolution.

    Raises:
        AntlibError: If an ANTLIB file cannot be read or parsed
    """
    store = DeclarationStore()
    with console.status("Parsing Java sources...", spinner="dots"):
        JavaParser().parse_paths([str(s) for s in sources], store, file_extensions=['.java'])

    locator = options.resource_locator()
    external = ExternalAntdocs(use_bundled=options.use_bundled_externals)
    external.load_ant_defaults(locator)
    for path in options.external_antdocs:
        external.load_label_href_properties(path)

    builder = ModelBuilder(store, diagnostics, locator)
    with console.status("Building the ANT type model...", spinner="dots"):
        registry = builder.build(
            [str(p) for p in options.antlib_files],
            options.antlib_resources,
        )

    return store, registry, LinkResolver(registry, store, external, diagnostics)


def print_groups(registry: TypeGroupRegistry) -> None:
    table = Table(title="Type Groups")
    table.add_column("Subdir", style="cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Types", style="green")
    for group in registry:
        table.add_row(group.subdir, group.name, str(len(group.types)))
    console.print(table)


def print_diagnostics(diagnostics: Diagnostics) -> None:
    counts = diagnostics.counts()
    errors, warnings = counts.get("ERROR", 0), counts.get("WARNING", 0)
    style = "red" if errors else "yellow" if warnings else "green"
    console.print(f"[{style}]{errors} error(s), {warnings} warning(s)[/{style}]")


def model_to_dict(registry: TypeGroupRegistry) -> Dict[str, Any]:
    """A JSON-compatible representation of the model."""
    groups = []
    for group in registry:
        groups.append({
            "subdir": group.subdir,
            "name": group.name,
            "heading": group.heading,
            "types": [
                {
                    "name": t.name,
                    "kind": t.kind,
                    "class": t.declaration.qualified_name,
                    "adaptTo": t.adapt_to.qualified_name if t.adapt_to else None,
                    "characterData": t.character_data.qualified_name if t.character_data else None,
                    "attributes": [
                        {"name": a.name, "type": a.type, "group": a.group, "method": a.member.qualified_name}
                        for a in t.attributes
                    ],
                    "subelements": [
                        {"name": s.name, "type": s.type, "group": s.group, "method": s.member.qualified_name}
                        for s in t.subelements
                    ],
                }
                for t in group.types
            ],
        })
    return {"typeGroups": groups}


@click.group()
@click.version_option(__version__)
def cli():
    """antdoc - Documentation generator for ANT tasks and types."""
    pass


@cli.command()
@model_options
@click.option('--destination', '-d', type=click.Path(), default='.', help='Output directory')
@click.option('--doctitle', 'doc_title', default=None, help='Title of the overview page')
@click.option('--windowtitle', 'window_title', default=None, help='Browser window title')
@click.option('--header', default=None, help='HTML shown at the top of each page')
@click.option('--footer', default=None, help='HTML shown at the foot of each page')
@click.option('--bottom', default=None, help='HTML shown at the bottom of each page')
def generate(sources, quiet, destination, **kwargs):
    """Generate HTML documentation for the ANT types defined in ANTLIBs."""
    if quiet:
        logging.getLogger().setLevel(logging.WARNING)

    options = make_options(destination=Path(destination), quiet=quiet, **kwargs)
    diagnostics = Diagnostics(logger)
    try:
        store, registry, resolver = build_model(sources, options, diagnostics)
    except AntlibError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    with console.status(f"Rendering HTML to {options.destination}...", spinner="dots"):
        written = HtmlRenderer(registry, store, resolver, options, diagnostics).render()

    if not quiet:
        print_groups(registry)
    print_diagnostics(diagnostics)
    console.print(f"[green]Documentation generated: {len(written)} files in {options.destination}[/green]")


@cli.command()
@model_options
@click.option('--json', 'json_path', type=click.Path(), default=None, help='Export the model to a JSON file')
def inspect(sources, quiet, json_path, **kwargs):
    """Show the ANT types, attributes and subelements derived from the sources."""
    if quiet:
        logging.getLogger().setLevel(logging.WARNING)

    options = make_options(quiet=quiet, **kwargs)
    diagnostics = Diagnostics(logger)
    try:
        store, registry, resolver = build_model(sources, options, diagnostics)
    except AntlibError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    print_groups(registry)
    for group, ant_type in registry.all_types():
        table = Table(title=f"{group.type_title(ant_type.name)} ({ant_type.declaration.qualified_name})")
        table.add_column("Kind", style="cyan")
        table.add_column("Name", style="cyan")
        table.add_column("Type", style="green")
        table.add_column("Method")
        if ant_type.character_data is not None:
            table.add_row("text", "", "java.lang.String", ant_type.character_data.signature)
        for attribute in ant_type.attributes:
            table.add_row("attribute", attribute.name, attribute.type, attribute.member.signature)
        for subelement in ant_type.subelements:
            table.add_row("subelement", subelement.name or "(any)", subelement.type, subelement.member.signature)
        console.print(table)

    print_diagnostics(diagnostics)

    if json_path:
        with open(json_path, 'w') as f:
            json.dump(model_to_dict(registry), f, indent=2)
        console.print(f"[green]Model exported to {json_path}[/green]")


if __name__ == '__main__':
    cli()
