"""
Command-line interface for Scene Mapper.
"""

import asyncio
import json
import logging
import random
from typing import Optional

import click
import structlog

from scene_mapper.config import get_settings

logger = structlog.get_logger(__name__)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Scene Mapper: Forensic Scene Interpretation."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    if debug:
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(10),
        )
    else:
        level = logging.getLevelName(get_settings().log_level.upper())
        if isinstance(level, int):
            structlog.configure(
                wrapper_class=structlog.make_filtering_bound_logger(level),
            )


# =========================================================================
# Server Commands
# =========================================================================


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting Scene Mapper API server on {host}:{port}")

    uvicorn.run(
        "scene_mapper.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


# =========================================================================
# Interpretation Commands
# =========================================================================


@cli.command()
@click.argument("text", type=str)
@click.option("--seed", type=int, default=None, help="Seed for reproducible output")
@click.option("--confidence", type=float, default=None, help="Supplied confidence (0-1)")
@click.option("--json", "as_json", is_flag=True, help="Print the scene graph as JSON")
@click.option("--report", is_flag=True, help="Print the export report")
def interpret(
    text: str,
    seed: Optional[int],
    confidence: Optional[float],
    as_json: bool,
    report: bool,
) -> None:
    """Interpret a scene description."""
    from scene_mapper.services.confidence import ConfidenceEstimator
    from scene_mapper.services.interpreter import InvalidInputError, SceneInterpreter
    from scene_mapper.services.report import build_report

    rng = random.Random(seed) if seed is not None else None
    interpreter = SceneInterpreter(rng=rng)
    estimator = ConfidenceEstimator(rng=interpreter.rng)

    try:
        scene = interpreter.interpret(text)
    except InvalidInputError as e:
        raise click.BadParameter(str(e), param_hint="TEXT")

    score = estimator.estimate(scene, supplied=confidence)

    if as_json:
        click.echo(json.dumps(
            {"scene": scene.to_dict(), "confidence": score.to_dict()},
            indent=2,
            ensure_ascii=False,
        ))
        return

    if report:
        click.echo(build_report(scene, score).to_text())
        return

    click.echo(f"\n=== {scene.title} ===\n")
    click.echo(f"Confidence: {score.percent}% ({score.band.value})")
    click.echo(f"Elements: {len(scene.elements)}")
    for element in scene.elements:
        x, y = element.position.rounded()
        click.echo(f"  {element.name} [{element.category.value}] at ({x}, {y})")
    click.echo(f"Connections: {len(scene.connections)}")
    for connection in scene.connections:
        click.echo(f"  {connection.source} -> {connection.target}")
    click.echo(f"\n{scene.narrative}")


@cli.command()
@click.argument("text", type=str)
@click.option("--seed", type=int, default=None, help="Seed for reproducible output")
@click.option("--add", "additions", multiple=True, help="Element name to add before committing")
@click.option("--remove", "removals", multiple=True, type=int, help="Element index to remove")
def animate(
    text: str,
    seed: Optional[int],
    additions: tuple[str, ...],
    removals: tuple[int, ...],
) -> None:
    """Process, edit and animate a scene, printing each render phase."""
    from scene_mapper.pipeline.orchestrator import PipelineStatus, SceneOrchestrator
    from scene_mapper.services.render_state import RenderStateMachine

    async def run_animation():
        rng = random.Random(seed) if seed is not None else None
        orchestrator = SceneOrchestrator(rng=rng)
        orchestrator.set_progress_callback(
            lambda status, label, progress: click.echo(f"[{progress:>4.0%}] {label}")
        )

        result = await orchestrator.submit(text)
        if result.status != PipelineStatus.COMPLETED:
            raise click.BadParameter(result.error or "processing failed", param_hint="TEXT")

        editor = orchestrator.preview(result)
        for name in additions:
            editor.add_element(name)
        for index in sorted(removals, reverse=True):
            editor.remove_element(index)

        machine = RenderStateMachine()
        machine.subscribe(
            lambda frame: click.echo(
                f"phase={frame.phase.name} "
                f"visible_elements={len(frame.visible_elements())} "
                f"visible_connections={len(frame.visible_connections())}"
            )
        )
        editor.commit(machine)
        await machine.settled()

        click.echo(f"\n{machine.graph.narrative}")

    asyncio.run(run_animation())


# =========================================================================
# Catalog Commands
# =========================================================================


@cli.command()
def catalog() -> None:
    """Show the detection catalog."""
    from scene_mapper.catalog.patterns import PATTERN_RULES

    click.echo("\n=== Detection Catalog ===\n")
    for rule in PATTERN_RULES:
        click.echo(f"{rule.category.display_name} ({rule.color}, {rule.icon})")
        click.echo(f"  {', '.join(sorted(rule.synonyms))}")


# =========================================================================
# Config Commands
# =========================================================================


@cli.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    click.echo("\n=== Scene Mapper Configuration ===\n")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Debug: {settings.debug}")
    click.echo(
        f"\nSpawn area: x {settings.spawn_x_min:.0f}-{settings.spawn_x_max:.0f}, "
        f"y {settings.spawn_y_min:.0f}-{settings.spawn_y_max:.0f}"
    )
    click.echo(f"Connection probability: {settings.connection_probability}")
    click.echo(f"Random seed: {settings.random_seed}")
    click.echo(f"\nConnect delay: {settings.render_connect_delay}s")
    click.echo(f"Element stagger: {settings.render_element_stagger}s")
    click.echo(f"Processing stage delay: {settings.processing_stage_delay}s")
    click.echo(
        f"\nConfidence bands: high >= {settings.confidence_high_threshold}, "
        f"medium >= {settings.confidence_medium_threshold}"
    )


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
