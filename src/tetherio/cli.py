import click
import functools
import logging
import os
import traceback

from . import constants
from .config import Config
from .utils import setup_logger, parse_module_levels
from .io import (
    InputStream,
    OutputStream,
    classify,
    create_router,
    ensure_directory,
    set_default_context,
    split_file_path,
)
from .tools import ddmmff, ddmmss, kmh_to_ms
from .exceptions import (
    TetherIOError,
    ConfigurationError,
    StreamIOError,
)
from . import __version__


def handle_errors(func):
    """Decorator to handle common exceptions"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _report("Configuration error", e)
        except StreamIOError as e:
            _report("IO error", e)
        except TetherIOError as e:
            _report("An unexpected application error occurred", e)
    return wrapper


def _report(title: str, error: Exception):
    logging.error(f"{title}: {error}")
    ctx = click.get_current_context()
    if ctx.obj and ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(__version__, prog_name='tetherio')
@click.option('-c', '--config', 'config_file', type=click.Path(dir_okay=False), default=None,
              help='Path to a tetherio.yml configuration file.')
@click.option('-d', '--debug', is_flag=True, default=False, help='Enable debug logging.')
@click.option('--log-levels', default=None, help="Per-module levels, e.g. 'io=DEBUG,cli=INFO'.")
@click.option('--log-file', type=click.Path(dir_okay=False), default=None, help='Also log to this file.')
@click.option('--device-root', type=click.Path(file_okay=False), default=None,
              help='Directory mirroring the device; selects the mirror transport.')
@click.pass_context
@handle_errors
def cli(ctx, config_file, debug, log_levels, log_file, device_root):
    """Read and write files on local disks, network shares and tethered devices."""
    overrides = {}
    if device_root:
        overrides['device'] = {'transport': 'mirror', 'root': device_root}
    if config_file is None and os.path.isfile(constants.DEFAULT_CONFIG_FILENAME):
        config_file = constants.DEFAULT_CONFIG_FILENAME

    config = Config(config_file, overrides=overrides)
    module_levels = dict(config.log.levels)
    module_levels.update(parse_module_levels(log_levels))
    setup_logger(
        debug=debug or config.log.debug,
        module_levels=module_levels or None,
        log_file=log_file or config.log.file,
    )

    context = config.create_context()
    set_default_context(context)
    ctx.obj = {
        'debug': debug,
        'config': config,
        'router': create_router(context),
    }


@cli.command('classify')
@click.argument('paths', nargs=-1, required=True)
def classify_cmd(paths):
    """Print the backend kind owning each PATH."""
    for path in paths:
        click.echo(f"{classify(path).value}\t{path}")


@cli.command('mkdir')
@click.argument('paths', nargs=-1, required=True)
@click.pass_context
@handle_errors
def mkdir_cmd(ctx, paths):
    """Create each directory PATH with all missing parents."""
    for path in paths:
        ensure_directory(path, ctx.obj['router'])
        logging.info(f"Directory ready: {path}")


@cli.command('cat')
@click.argument('path')
@click.pass_context
@handle_errors
def cat_cmd(ctx, path):
    """Write the contents of PATH to standard output."""
    with InputStream(path, ctx.obj['router']) as stream:
        click.echo(stream.getvalue(), nl=False)


@cli.command('put')
@click.argument('src')
@click.argument('dst')
@click.option('-p', '--parents', is_flag=True, default=False, help='Create the destination directory first.')
@click.pass_context
@handle_errors
def put_cmd(ctx, src, dst, parents):
    """Copy SRC to DST, each on whichever backend owns it."""
    router = ctx.obj['router']
    if parents:
        parent, _ = split_file_path(dst)
        if parent:
            ensure_directory(parent, router)
    with InputStream(src, router) as source, OutputStream(dst, router) as target:
        target.write(source.getvalue())
    logging.info(f"Copied '{src}' to '{dst}'")


@cli.command('exists')
@click.argument('path')
@click.pass_context
def exists_cmd(ctx, path):
    """Print whether PATH exists; exit status 1 when it does not."""
    found = ctx.obj['router'].exists(path)
    click.echo("yes" if found else "no")
    if not found:
        ctx.exit(1)


@cli.command('coord')
@click.argument('value', type=float)
@click.option('--lon/--lat', 'longitude', default=False, help='Treat VALUE as a longitude or a latitude.')
@click.option('--seconds', is_flag=True, default=False, help='Format as DD:MM:SS instead of DD:MM.FFF.')
def coord_cmd(value, longitude, seconds):
    """Format a DD.FF coordinate."""
    click.echo(ddmmss(value, longitude) if seconds else ddmmff(value, longitude))


@cli.command('speed')
@click.argument('kmh', type=click.IntRange(min=0))
def speed_cmd(kmh):
    """Convert a speed from km/h to m/s."""
    click.echo(kmh_to_ms(kmh))


if __name__ == '__main__':
    cli()
