"""Typer CLI for teleport routing and dataset maintenance."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from teleport_router.core.config import clamp_walk_radius, default_config_path, load_config
from teleport_router.core.errors import RouteError
from teleport_router.data.dataset import DatasetProvider
from teleport_router.routing.service import RouteService

app = typer.Typer(help="Shortest-time routing with teleporter links")

ConfigOption = typer.Option(None, "--config", "-c", help="Router config YAML (default: configs/router_defaults.yaml)")


def _config_path(config: Optional[Path]) -> Path:
    return config if config is not None else default_config_path()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def find(
    x: float = typer.Argument(0.0, help="Destination X (HUD)"),
    z: float = typer.Argument(0.0, help="Destination Z (HUD)"),
    at: str = typer.Option("0,0,0", "--at", help="Agent world position x,y,z"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to save GeoJSON"),
    config: Optional[Path] = ConfigOption,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Plot a route to the given HUD coordinates."""
    _setup_logging(verbose)
    try:
        ax, ay, az = map(float, at.split(","))
    except ValueError:
        typer.echo(f"Invalid --at '{at}', expected x,y,z")
        raise typer.Exit(1)

    cfg = load_config(_config_path(config))
    service = RouteService(config=cfg, provider=DatasetProvider(cfg.dataset))
    outcome = service.find_route_world(ax, ay, az, x, z)

    if outcome.route is None:
        typer.echo(f"[tl] Failed to update TL data: {outcome.message}")
        raise typer.Exit(1)

    route = outcome.route
    for warning in route.warnings:
        typer.echo(f"[tl] {warning}")
    if outcome.found:
        typer.echo(f"[tl] {outcome.message}")

    points = route.to_world(service.frame)
    for idx, p in enumerate(points):
        hop = ""
        if idx > 0 and route.teleport_flags[idx - 1]:
            hop = " (teleport)"
        typer.echo(f"  {idx:>3}: {p.x:.0f} {p.y:.0f} {p.z:.0f}{hop}")

    if output:
        feature = route.to_feature(service.frame)
        output.write_text(json.dumps({"type": "FeatureCollection", "features": [feature]}, indent=2))
        typer.echo(f"Saved route to {output}")


@app.command()
def walk(
    radius: Optional[float] = typer.Argument(None, help="Walk radius between nodes (HUD units). Omit to show current."),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Show or set the walking connection radius."""
    path = _config_path(config)
    cfg = load_config(path)
    if radius is None:
        typer.echo(f"[tl] walk={cfg.walk.radius:.0f} (HUD)")
        return
    cfg.walk.radius = clamp_walk_radius(radius)
    cfg.save(path)
    typer.echo(f"[tl] walk set to {cfg.walk.radius:.0f} (HUD)")


@app.command()
def link(
    url: str = typer.Argument(..., help="GeoJSON URL of the teleporter dataset"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Set the dataset URL used for updates."""
    if not url.strip():
        typer.echo("[tl] Invalid URL.")
        raise typer.Exit(1)
    path = _config_path(config)
    cfg = load_config(path)
    cfg.dataset.remote_url = url.strip()
    cfg.save(path)
    typer.echo(f"[tl] GeoJSON link set to: {cfg.dataset.remote_url}")


@app.command()
def refresh(
    config: Optional[Path] = ConfigOption,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Download the dataset now, ignoring the TTL."""
    _setup_logging(verbose)
    cfg = load_config(_config_path(config))
    try:
        path = DatasetProvider(cfg.dataset).refresh()
    except RouteError as exc:
        typer.echo(f"[tl] error loading: {exc}")
        raise typer.Exit(1)
    typer.echo(f"[tl] dataset saved to {path}")


@app.command()
def info(config: Optional[Path] = ConfigOption) -> None:
    """Show configuration and dataset statistics."""
    cfg = load_config(_config_path(config))
    provider = DatasetProvider(cfg.dataset)

    typer.echo("=== Teleport Router Configuration ===")
    typer.echo(f"Walk radius:      {cfg.walk.radius:.0f}")
    typer.echo(f"Direct threshold: {cfg.walk.direct_threshold:.0f}")
    typer.echo(f"Teleport weight:  {cfg.teleport.weight:.1f} s")
    typer.echo(f"Dataset URL:      {cfg.dataset.remote_url}")
    typer.echo(f"TTL:              {cfg.dataset.ttl_hours} h")

    typer.echo("")
    typer.echo("=== Data Availability ===")
    age = provider.age_hours()
    if age is None:
        typer.echo(f"Dataset: ✗ not found ({provider.cache_path})")
        return
    stale = " (stale)" if provider.needs_update() else ""
    typer.echo(f"Dataset: ✓ {provider.cache_path}, {age:.1f} h old{stale}")
    if stale:
        return
    try:
        graph = RouteService(config=cfg, provider=provider).load_base_graph()
    except RouteError as exc:
        typer.echo(f"Graph:   ✗ {exc}")
        raise typer.Exit(1)
    typer.echo(f"Graph:   {graph.node_count} teleporters, {graph.teleport_count} links")


if __name__ == "__main__":
    app()
