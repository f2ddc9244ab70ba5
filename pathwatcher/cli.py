import time

import click
from rich.console import Console
from rich.table import Table

from pathwatcher import config
from pathwatcher import factory
from pathwatcher import logger as pw_logger
from pathwatcher.errors import InvalidPathError
from pathwatcher.handlers import EventHandler


class ConsoleEventHandler(EventHandler):
    """Prints forwarded events to a rich console."""

    def __init__(self, console=None):
        self.console = console or Console()

    def _print(self, sender, kind, text, style):
        stamp = time.strftime("%H:%M:%S")
        self.console.print(f"[dim]{stamp}[/dim] [{style}]{kind:<8}[/{style}] {text}  [dim]({sender.name})[/dim]")

    def on_changed(self, sender, event_args):
        self._print(sender, "changed", event_args.full_path, "yellow")

    def on_created(self, sender, event_args):
        self._print(sender, "created", event_args.full_path, "green")

    def on_deleted(self, sender, event_args):
        self._print(sender, "deleted", event_args.full_path, "red")

    def on_error(self, sender, event_args):
        self._print(sender, "error", str(event_args.exception), "bold red")

    def on_renamed(self, sender, event_args):
        self._print(sender, "renamed", f"{event_args.old_full_path} -> {event_args.full_path}", "cyan")


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Path to configuration TOML file.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx, config_path, debug):
    """
    PathWatcher CLI: watch files and directories for changes.
    """
    try:
        cfg = config.load_config(config_path)
        if debug:
            cfg.setdefault("logging", {})["level"] = "DEBUG"
    except Exception as e:
        click.echo(f"Error loading configuration: {e}")
        ctx.abort()
    pw_logger.setup_from_config(cfg)
    ctx.obj = {"config": cfg, "config_path": config_path, "debug": debug}


@main.command()
@click.pass_context
def show_config(ctx):
    """
    Show the loaded configuration.
    """
    cfg = ctx.obj.get("config")
    click.echo(cfg)


@main.command()
@click.argument("paths", nargs=-1, required=True)
def info(paths):
    """
    Show what PathWatcher makes of each PATH.
    """
    table = Table(title="Watch Targets")
    table.add_column("Path", style="cyan")
    table.add_column("Kind", style="magenta", no_wrap=True, min_width=9)
    table.add_column("Name")
    table.add_column("Full Path")
    table.add_column("MIME Type")

    for path in paths:
        try:
            watcher = factory.create_instance(path)
        except InvalidPathError as e:
            table.add_row(path, "invalid", "", "", str(e))
            continue
        with watcher:
            table.add_row(path, watcher.kind.value, watcher.name, watcher.full_path, watcher.mime_type)

    Console().print(table)


@main.command()
@click.argument("paths", nargs=-1)
@click.option("--watch-list", "-w", default=None, help="YAML file or directory listing paths to watch.")
@click.option("--duration", "-d", type=float, default=None, help="Stop after this many seconds.")
@click.pass_context
def watch(ctx, paths, watch_list, duration):
    """
    Watch PATHs and print their events until interrupted.
    """
    cfg = ctx.obj.get("config")
    watcher_cfg = cfg.get("watcher", {})
    targets = list(paths)
    if watch_list:
        try:
            targets.extend(config.load_watch_lists(watch_list))
        except Exception as e:
            click.echo(f"Error loading watch list: {e}")
            return
    if not targets:
        targets = list(watcher_cfg.get("paths", []))
    if not targets:
        click.echo("Nothing to watch.")
        return

    console = Console()
    handler = ConsoleEventHandler(console)
    watchers = []
    for target in targets:
        try:
            watcher = factory.create_instance(
                target, handler, stop_timeout=watcher_cfg.get("stop_timeout", 5.0)
            )
        except InvalidPathError as e:
            click.echo(f"Skipping: {e}")
            continue
        watcher.start_watching()
        watchers.append(watcher)
        click.echo(f"Watching {watcher.kind.value} {watcher.full_path}")

    if not watchers:
        click.echo("No valid paths to watch.")
        return

    started = time.monotonic()
    try:
        while duration is None or time.monotonic() - started < duration:
            time.sleep(0.2)
    except KeyboardInterrupt:
        pass
    finally:
        for watcher in watchers:
            watcher.close()
    click.echo("Stopped.")


if __name__ == "__main__":
    main()
