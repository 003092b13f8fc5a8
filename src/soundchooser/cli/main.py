"""soundchooser CLI - list audio sinks and switch the default one."""

from __future__ import annotations

import json

import click

from soundchooser.utils.logging import setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option(
    "--script",
    "script_path",
    envvar="SOUNDCHOOSER_SCRIPT",
    default=None,
    type=click.Path(dir_okay=False),
    help="Enumeration script (or set SOUNDCHOOSER_SCRIPT env var)",
)
@click.option("--timeout", type=float, default=None, help="Enumeration timeout in seconds")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    json_output: bool,
    script_path: str | None,
    timeout: float | None,
) -> None:
    """soundchooser - pick the default audio output sink."""
    from pydantic import ValidationError

    from soundchooser.settings import ChooserSettings

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_output"] = json_output
    try:
        ctx.obj["settings"] = ChooserSettings.from_env(
            script_path=script_path, timeout_seconds=timeout,
        )
    except ValidationError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}") from exc
    setup_logging(level="DEBUG" if debug else "WARNING", json_output=json_output)


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List the audio sinks reported by the enumeration script."""
    from soundchooser.core.coordinator import MSG_EMPTY_OUTPUT, MSG_NO_DEVICES
    from soundchooser.core.lister import DeviceLister
    from soundchooser.models.device import ListStatus

    settings = ctx.obj["settings"]
    result = DeviceLister(timeout=settings.timeout_seconds).list_devices(settings.script_path)

    if ctx.obj.get("json_output"):
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    elif result.status == ListStatus.COMMAND_MISSING:
        click.echo(f"ERROR: {result.message}")
    elif result.status == ListStatus.COMMAND_FAILED:
        click.echo(f"ERROR: Enumeration failed: {result.message}")
    elif result.status == ListStatus.EMPTY_OUTPUT:
        click.echo(MSG_EMPTY_OUTPUT)
    elif not result.devices:
        click.echo(MSG_NO_DEVICES)
    else:
        click.echo(f"Found {len(result.devices)} device(s):")
        for dev in result.devices:
            click.echo(f"  [{dev.id}] {dev.label}")
        if result.skipped:
            click.echo(f"  ({result.skipped} malformed line(s) skipped)")

    if result.status in (ListStatus.COMMAND_MISSING, ListStatus.COMMAND_FAILED):
        ctx.exit(1)


@cli.command()
@click.argument("device_id")
@click.option("--label", default=None, help="Display name used in log output")
@click.pass_context
def switch(ctx: click.Context, device_id: str, label: str | None) -> None:
    """Make DEVICE_ID the default audio sink."""
    from soundchooser.core.switcher import DeviceSwitcher
    from soundchooser.exceptions import SwitchError

    settings = ctx.obj["settings"]
    switcher = DeviceSwitcher(command=settings.switch_command)
    try:
        switcher.spawn(device_id)
    except SwitchError as exc:
        click.echo(f"ERROR: {exc}")
        ctx.exit(1)
    finally:
        switcher.shutdown(wait=False)

    click.echo(f"Switching to {label or device_id} (ID: {device_id}).")


@cli.command()
@click.option("--no-prompt", is_flag=True, help="Print the menu without asking for a choice")
@click.pass_context
def menu(ctx: click.Context, no_prompt: bool) -> None:
    """Render the device menu and activate an entry."""
    from soundchooser.core.coordinator import MenuCoordinator
    from soundchooser.core.lister import DeviceLister
    from soundchooser.core.presenter import EntryKind, MenuModelPresenter
    from soundchooser.core.switcher import DeviceSwitcher

    settings = ctx.obj["settings"]
    presenter = MenuModelPresenter()
    switcher = DeviceSwitcher(command=settings.switch_command)
    coordinator = MenuCoordinator(
        presenter,
        lister=DeviceLister(timeout=settings.timeout_seconds),
        switcher=switcher,
        script_path=settings.script_path,
        title=settings.menu_title,
    )
    coordinator.refresh()

    entries = presenter.entries
    if ctx.obj.get("json_output"):
        click.echo(json.dumps([e.model_dump(mode="json") for e in entries], indent=2))
    else:
        for index, entry in enumerate(entries):
            if entry.kind == EntryKind.SEPARATOR:
                click.echo("-" * 40)
            elif entry.selectable:
                click.echo(f"  {index:>2}) {entry.text}")
            else:
                click.echo(f"      {entry.text}")

    choices = [i for i, e in enumerate(entries) if e.selectable]
    if no_prompt or not choices:
        switcher.shutdown()
        return

    index = click.prompt("Select device", type=click.Choice([str(i) for i in choices]))
    presenter.activate(int(index))
    # Let the spawn attempt finish and log before the process exits
    switcher.shutdown(wait=True)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", type=int, default=8000, help="HTTP port")
@click.option("--no-ui", is_flag=True, help="API only, no web menu")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, no_ui: bool) -> None:
    """Start the web server (API + menu page)."""
    import uvicorn
    from soundchooser.api.app import create_app

    setup_logging(level="DEBUG" if ctx.obj["debug"] else "INFO", json_output=ctx.obj["json_output"])
    app = create_app(enable_ui=not no_ui, settings=ctx.obj["settings"])
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    cli()
