"""Interfaz de línea de comandos de Benford Engine.

Benford Engine command line interface.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from benford_engine.config import load_config
from benford_engine.logging import setup_logging_from_config
from benford_engine.pipeline import analyze_sources

app = typer.Typer(help="Benford Engine CLI")


@app.callback()
def main() -> None:
    """Interfaz de línea de comandos de Benford Engine.

    English: Benford Engine command line interface.
    """


@app.command()
def analyze(
    paths: List[Path] = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to rules.yaml."),
    parallel: Optional[bool] = typer.Option(None, "--parallel/--sequential", help="Aggregation mode."),
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Worker pool size; implies --parallel unless --sequential is given."
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level."),
) -> None:
    """Analiza archivos de texto (un registro por línea) y emite JSON.

    English: Analyze text files (one record per line) and print JSON reports.
    """
    try:
        settings = load_config(config)
        setup_logging_from_config(settings.logging, log_level)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc

    if parallel is not None:
        settings.aggregation.parallel = parallel
    if workers is not None:
        settings.aggregation.workers = workers
        # --workers implica --parallel salvo --sequential explícito.
        if parallel is None:
            settings.aggregation.parallel = True

    # Bytes no UTF-8 se reemplazan; una línea que empieza con U+FFFD queda inválida.
    sources = {
        str(path): path.read_text(encoding="utf-8", errors="replace").splitlines() for path in paths
    }
    results = analyze_sources(sources, settings)

    typer.echo(json.dumps([result.to_dict() for result in results], indent=2))
    if not all(result.ok for result in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
