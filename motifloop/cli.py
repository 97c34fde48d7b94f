"""
Command-line interface for motifloop
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__, get_info
from .config import Config, get_default_config, load_config, save_config
from .core import LoopPredictionPipeline
from .exceptions import MotifLoopError
from .utils import setup_logging, validate_environment


class CLIContext:
    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[Config] = None
        self.verbose: bool = False
        self.quiet: bool = False


def _build_config(cli_ctx: CLIContext, **overrides) -> Config:
    """Start from the --config file (or defaults) and apply command options"""
    config = cli_ctx.config if cli_ctx.config is not None else get_default_config()
    config_dict = config.to_dict()

    for section, key, value in (
        ("pairs", "max_dist", overrides.get("max_dist")),
        ("signal", "window", overrides.get("window")),
        ("signal", "n_workers", overrides.get("n_workers")),
        ("labeling", "tolerance", overrides.get("tolerance")),
    ):
        if value is not None:
            config_dict[section][key] = value

    if overrides.get("no_cutoff"):
        config_dict["prediction"]["cutoff"] = None
    elif overrides.get("cutoff") is not None:
        config_dict["prediction"]["cutoff"] = overrides["cutoff"]

    if overrides.get("zero_fill"):
        config_dict["signal"]["zero_fill"] = True

    return Config(**config_dict)


@click.group()
@click.version_option(__version__)
@click.option(
    "--config", "-c", type=click.Path(exists=True), help="Configuration file path"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Enable quiet mode (minimal output)")
@click.pass_context
def main(ctx, config, verbose, quiet):
    """
    motifloop: predict chromatin loops between motif pairs

    Candidate motif pairs are scored from their distance, strand orientation,
    motif strength and the correlation of protein-binding signal at both anchors.
    """
    cli_ctx = CLIContext()
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet

    log_level = "DEBUG" if verbose else "WARNING" if quiet else "INFO"
    setup_logging(level=log_level)

    if config:
        cli_ctx.config_file = Path(config)
        try:
            cli_ctx.config = load_config(cli_ctx.config_file)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    ctx.obj = cli_ctx


@main.command()
def info():
    """Show motifloop package information"""

    info_data = get_info()

    click.echo("=" * 50)
    click.echo(f"motifloop v{info_data['version']}")
    click.echo("=" * 50)
    click.echo(f"Description: {info_data['description']}")
    click.echo(f"Python version: {info_data['python_version']}")
    click.echo()

    click.echo("Available modules:")
    for module in info_data["modules"]:
        click.echo(f"  - {module}")
    click.echo()

    issues = validate_environment()
    click.echo("Environment: " + ("OK" if not issues else "; ".join(issues)))


@main.command()
@click.argument("output_file", type=click.Path())
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format for configuration file",
)
def init_config(output_file, fmt):
    """Initialize a new motifloop configuration file"""

    output_path = Path(output_file)

    if output_path.exists():
        if not click.confirm(f"File {output_path} already exists. Overwrite?"):
            click.echo("Configuration initialization cancelled.")
            return

    config = get_default_config()

    if fmt == "json":
        with open(output_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
    else:
        save_config(config, output_path)

    click.echo(f"Configuration file created: {output_path}")
    click.echo("Edit this file to customize your analysis parameters.")


@main.command()
@click.argument("motif_file", type=click.Path(exists=True))
@click.argument("signal_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path())
@click.option("--max-dist", type=int, help="Maximum anchor distance in bp")
@click.option("--window", type=int, help="Signal window width in bp")
@click.option("--workers", "n_workers", type=int, help="Concurrent signal reads")
@click.option("--cutoff", type=click.FloatRange(0.0, 1.0), help="Minimum probability")
@click.option("--no-cutoff", is_flag=True, help="Report every scored pair")
@click.option("--zero-fill", is_flag=True, help="Use zeros where signal is unavailable")
@click.pass_context
def predict(ctx, motif_file, signal_file, output_file, **options):
    """Predict loops from a BED6 motif file and a bigWig signal track"""

    config = _build_config(ctx.obj, **options)

    try:
        pipeline = LoopPredictionPipeline(config)
        loops = pipeline.run(motifs=motif_file, track=signal_file)
    except (MotifLoopError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pipeline.to_dataframe(loops).to_csv(output_path, sep="\t", index=False)

    click.echo(f"{len(loops)} predicted loops written to {output_path}")


@main.command()
@click.argument("motif_file", type=click.Path(exists=True))
@click.argument("signal_file", type=click.Path(exists=True))
@click.argument("loops_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path())
@click.option("--max-dist", type=int, help="Maximum anchor distance in bp")
@click.option("--window", type=int, help="Signal window width in bp")
@click.option("--tolerance", type=int, help="Anchor match tolerance in bp")
@click.option("--zero-fill", is_flag=True, help="Use zeros where signal is unavailable")
@click.pass_context
def label(ctx, motif_file, signal_file, loops_file, output_file, **options):
    """Build a labelled training table against known loops (BEDPE)"""

    config = _build_config(ctx.obj, **options)

    try:
        pipeline = LoopPredictionPipeline(config)
        pairs = pipeline.training_pairs(
            motifs=motif_file, track=signal_file, known_loops=loops_file
        )
    except (MotifLoopError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pipeline.to_dataframe(pairs).to_csv(output_path, sep="\t", index=False)

    click.echo(f"{len(pairs)} labelled pairs written to {output_path}")


if __name__ == "__main__":
    main()
