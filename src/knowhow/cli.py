"""Command line entry point.

    knowhow [analyze|match] [--workdir PATH] [--verbose]

Exit code 0 on success, 1 on any configuration, service or pipeline error.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiohttp
import typer

from knowhow.config import KnowHowConfig
from knowhow.exceptions import ConfigurationError, KnowHowError
from knowhow.infrastructure.llm.providers import build_transport
from knowhow.workflows import AnalyzeRunner, SimilarityRunner, format_for_chat
from knowhow.workflows.match import SIMILAR_CASES_ARTIFACT

logger = logging.getLogger(__name__)

LOG_LEVEL_VAR = "KNOWHOW_LOG_LEVEL"
MODES = ("analyze", "match")

app = typer.Typer(add_completion=False)


def _setup_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.getenv(LOG_LEVEL_VAR, "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _run_analyze(config: KnowHowConfig) -> None:
    result = asyncio.run(AnalyzeRunner(config, build_transport(config)).run())

    typer.echo("=== CASE (FULL) ===")
    typer.echo(result.case.model_dump_json(indent=4))
    typer.echo("\nSaved:")
    for path in result.written:
        typer.echo(f"- {path}")


def _run_match(config: KnowHowConfig) -> None:
    runner = SimilarityRunner(config, build_transport(config))
    result = asyncio.run(runner.run())

    typer.echo("=== SIMILAR CASES ===")
    typer.echo(format_for_chat(result))
    typer.echo(f"\nSaved to: {runner.store.artifact_path(SIMILAR_CASES_ARTIFACT)}")


@app.command()
def main(
    mode: str = typer.Argument("analyze", help="Workflow to run: analyze or match"),
    workdir: Path = typer.Option(
        Path("."),
        "--workdir",
        "-w",
        help="Directory holding crash.txt, pr.txt and the case directories",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    _setup_logging(verbose)

    try:
        config = KnowHowConfig.from_environment(workdir)

        mode = mode.lower()
        if mode not in MODES:
            raise ConfigurationError(f"Invalid mode: {mode}", hint="Use: analyze or match")

        if mode == "analyze":
            _run_analyze(config)
        else:
            _run_match(config)
    except KnowHowError as e:
        typer.echo(f"Error: {e}", err=True)
        if e.hint:
            typer.echo(f"Hint: {e.hint}", err=True)
        raise typer.Exit(1)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"Completion service call failed: {e!r}")
        typer.echo(f"Error: completion service call failed after all retries: {e!r}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception(f"Unexpected failure in {mode} mode")
        typer.echo(f"Error: unexpected failure: {e!r}", err=True)
        raise typer.Exit(1)
