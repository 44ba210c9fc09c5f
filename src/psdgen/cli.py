"""CLI entry point for the psdgen schema compiler.

Usage:
    psdgen run                                  # Run the full pipeline
    psdgen run-step psd_parse                   # Run a single step
    psdgen info                                 # Show pipeline steps
    psdgen entities data/raw/schemas/IFC4.xsd --root IfcWall
    psdgen check data/raw/schemas/IFC4.xsd IfcWallStandardCase IfcProduct
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from psdgen.core.logging import setup_logging

app = typer.Typer(name="psdgen", help="IFC property set schema compiler")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    log_level: str = typer.Option("INFO", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, help="Also write the log to this file"),
) -> None:
    """Run the full pipeline."""
    setup_logging(log_level, log_file)
    from psdgen.core.pipeline_runner import run_pipeline

    run_pipeline(config)


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. psd_parse)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging(log_level)
    from psdgen.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    input_data = dict(entry.inputs)
    if input_json:
        input_data.update(json.loads(input_json))
    else:
        schema = step_cls.input_type.model_json_schema()
        missing = [f for f in schema.get("required", []) if f not in input_data]
        if missing:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {missing}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  psdgen run-step {step_name} -i \'{{"{missing[0]}": "path"}}\'')
            raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    step_input = step_cls.input_type(**input_data)
    output = step_instance.execute(step_input)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from psdgen.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


def _load_schema(schema_file: Path):
    from psdgen.steps.s01_entity_schema._xsd_reader import read_xsd_schema

    if not schema_file.exists():
        console.print(f"[red]Schema file not found: {schema_file}[/red]")
        raise typer.Exit(1)
    return read_xsd_schema(schema_file)


@app.command()
def entities(
    schema_file: Path = typer.Argument(..., help="ifcXML schema (.xsd)"),
    root: str = typer.Option("IfcProduct", help="Entity whose branch is shown"),
) -> None:
    """Show an entity branch of a schema as a tree."""
    setup_logging("WARNING")
    schema = _load_schema(schema_file)
    node = schema.find(root)
    if node is None:
        console.print(f"[red]{root} is not an entity of {schema.version}[/red]")
        raise typer.Exit(1)

    def _label(n) -> str:
        return f"[dim]{n.name} (ABS)[/dim]" if n.is_abstract else f"[cyan]{n.name}[/cyan]"

    def _add(branch: Tree, n) -> None:
        for c in sorted(n.children, key=lambda c: c.name):
            _add(branch.add(_label(c)), c)

    tree = Tree(_label(node))
    _add(tree, node)
    console.print(tree)


@app.command()
def check(
    schema_file: Path = typer.Argument(..., help="ifcXML schema (.xsd)"),
    entity: str = typer.Argument(..., help="Entity to test"),
    other: str = typer.Argument(..., help="Candidate supertype"),
    strict: bool = typer.Option(True, help="Strict test (an entity is not its own subtype)"),
) -> None:
    """Test whether ENTITY is a subtype of OTHER and list its supertypes."""
    setup_logging("WARNING")
    schema = _load_schema(schema_file)
    if entity not in schema:
        console.print(f"[yellow]{entity} is not an entity of {schema.version}[/yellow]")
        raise typer.Exit(1)

    result = schema.is_subtype_of(entity, other, strict=strict)
    colour = "green" if result else "red"
    console.print(f"[{colour}]{entity} subtype of {other}: {result}[/{colour}]")
    chain = schema.find_all_super_types(entity, other)
    console.print(f"Supertypes up to {other}: {' -> '.join(chain) if chain else '-'}")


if __name__ == "__main__":
    app()
