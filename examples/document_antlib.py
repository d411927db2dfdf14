#!/usr/bin/env python3
"""
Example script demonstrating how to use antdoc to document an ANTLIB.
"""
import sys
import logging
from pathlib import Path
from rich.console import Console
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from antdoc.analysis import ExternalAntdocs, LinkResolver, ModelBuilder
from antdoc.config import DocletOptions
from antdoc.core import DeclarationStore, Diagnostics
from antdoc.parsers import JavaParser
from antdoc.render import HtmlRenderer


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
console = Console()


def main():
    """Main function for the example."""
    if len(sys.argv) < 3:
        console.print("[red]Error: Please provide a Java source directory and an ANTLIB file.[/red]")
        console.print("Usage: python document_antlib.py <java_source_dir> <antlib.xml> [<destination>]")
        return 1

    source_dir, antlib_file = sys.argv[1], sys.argv[2]
    destination = Path(sys.argv[3] if len(sys.argv) > 3 else "antdoc-output")

    # Parse the Java sources into a declaration store
    store = DeclarationStore()
    console.print(f"[bold cyan]Parsing Java code from {source_dir}...[/bold cyan]")
    JavaParser().parse_paths([source_dir], store, file_extensions=['.java'])

    stats = store.get_statistics()
    console.print(f"Parsed {stats['total_declarations']} declarations with {stats['total_members']} methods")

    # Build the ANT type model
    diagnostics = Diagnostics()
    options = DocletOptions(destination=destination, source_path=[Path(source_dir)])
    registry = ModelBuilder(store, diagnostics, options.resource_locator()).build([antlib_file])

    table = Table(title="ANT Types")
    table.add_column("Group", style="cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Attributes", style="green")
    table.add_column("Subelements", style="green")
    for group, ant_type in registry.all_types():
        table.add_row(group.subdir, ant_type.name, str(len(ant_type.attributes)), str(len(ant_type.subelements)))
    console.print(table)

    # Render HTML
    resolver = LinkResolver(registry, store, ExternalAntdocs(), diagnostics)
    written = HtmlRenderer(registry, store, resolver, options, diagnostics).render()
    console.print(f"[green]Wrote {len(written)} files to {destination}[/green]")

    for diagnostic in diagnostics.errors + diagnostics.warnings:
        console.print(f"[yellow]{diagnostic}[/yellow]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
