"""Command-line interface for inspecting and resolving policy aliases."""

import sys
from typing import Optional, Tuple
from pathlib import Path
import typer
from rich.console import Console
from rich.table import Table
from loguru import logger

from .loader import (
    CapabilityFamily,
    ConstructorRegistry,
    DEFAULT_NAMESPACE,
    PolicyLoader,
    PolicyLoaderError,
    build_default_registry,
    canonical_identifier,
    family_package,
    get_default_registry,
)
from .utils.config import LoaderSettings, load_config

app = typer.Typer(name="cloud-policies", help="Resolve simulation policy aliases")
console = Console()

# Sink added for LoaderSettings.log_file, replaced on every setup
_log_file_sink: Optional[int] = None


@app.command()
def families() -> None:
    """Show the policy families and their naming rules."""
    table = Table(title="Policy Families")
    table.add_column("Family", style="cyan")
    table.add_column("Type stem", style="green")
    table.add_column("Package", style="yellow")

    for family in CapabilityFamily:
        table.add_row(family.name.lower(), family.stem, family_package(family))

    console.print(table)


@app.command("list")
def list_policies(
    family: Optional[str] = typer.Option(None, "--family", "-f", help="Only show this family"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
) -> None:
    """List the registered policy types and their aliases."""
    registry = create_registry(setup(config, verbose=False))
    selected = [parse_family(family)] if family else list(CapabilityFamily)

    table = Table(title="Registered Policies")
    table.add_column("Family", style="cyan")
    table.add_column("Alias", style="green")
    table.add_column("Kind", style="magenta")
    table.add_column("Canonical identifier", style="yellow")

    for fam in selected:
        for identifier in registry.identifiers(fam):
            kind, alias = split_identifier(fam, identifier)
            table.add_row(fam.name.lower(), alias, kind or "-", identifier)

    console.print(table)


@app.command()
def resolve(
    family: str = typer.Argument(help="Policy family, e.g. vm_scheduler or VmScheduler"),
    alias: str = typer.Argument(help="Policy alias, e.g. TimeShared"),
    kind_prefix: str = typer.Option("", "--kind-prefix", "-k", help="Provisioner kind prefix, e.g. Pe"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Resolve an alias and build the policy it names."""
    fam = parse_family(family)
    loader = PolicyLoader(create_registry(setup(config, verbose)))

    try:
        identifier = canonical_identifier(fam, alias, loader.registry.namespace, kind_prefix)
        instance = loader.load(fam, alias, kind_prefix=kind_prefix)
    except (PolicyLoaderError, ValueError) as e:
        console.print(f"❌ {e}", style="bold red")
        raise typer.Exit(code=1)

    table = Table(title="Resolved Policy")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Family", fam.stem)
    table.add_row("Alias", alias)
    table.add_row("Canonical identifier", identifier)
    table.add_row("Type", type(instance).__name__)
    console.print(table)


def setup(config: Optional[Path], verbose: bool) -> LoaderSettings:
    """Load settings and configure logging for a command."""
    global _log_file_sink

    if config is not None:
        try:
            settings = load_config(config)
        except (FileNotFoundError, ValueError) as e:
            console.print(f"❌ {e}", style="bold red")
            raise typer.Exit(code=2)
    else:
        settings = LoaderSettings()

    if _log_file_sink is not None:
        logger.remove(_log_file_sink)
        _log_file_sink = None

    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
    if settings.log_file:
        _log_file_sink = logger.add(settings.log_file, level=settings.log_level)

    return settings


def create_registry(settings: LoaderSettings) -> ConstructorRegistry:
    """Registry for the configured namespace."""
    if settings.namespace == DEFAULT_NAMESPACE:
        return get_default_registry()
    return build_default_registry(settings.namespace)


def parse_family(name: str) -> CapabilityFamily:
    """Accept a family by member name (``vm_scheduler``) or stem (``VmScheduler``)."""
    for family in CapabilityFamily:
        if name.upper() == family.name or name == family.stem:
            return family
    valid = ", ".join(f.name.lower() for f in CapabilityFamily)
    raise typer.BadParameter(f"Unknown family '{name}'. Must be one of: {valid}")


def split_identifier(family: CapabilityFamily, identifier: str) -> Tuple[str, str]:
    """Split a canonical identifier into its (kind prefix, alias)."""
    type_name = identifier.rsplit(".", 1)[-1]
    if family is not CapabilityFamily.RESOURCE_PROVISIONER:
        return "", type_name[len(family.stem):]
    if type_name.startswith(family.stem):
        return "", type_name[len(family.stem):]
    kind, _, alias = type_name.partition("Provisioner")
    return kind, alias


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
