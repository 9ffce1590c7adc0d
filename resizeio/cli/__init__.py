import click
from click_aliases import ClickAliasedGroup

from resizeio import paths, schemas
from resizeio.resizer import default_resizer
from resizeio.settings import settings

from .util import exit_with

ACTIONS = click.Choice([a.value for a in schemas.Action])


def dimension_options(f):
    f = click.option("--height", "-h", type=click.INT, default=None)(f)
    f = click.option("--width", "-w", type=click.INT, default=None)(f)
    f = click.option("--action", "-a", type=ACTIONS, default="fit")(f)
    return f


@click.group(cls=ClickAliasedGroup)
@click.version_option(package_name="resizeio")
@click.pass_context
def cli(ctx):
    if ctx.obj is None:
        ctx.obj = {}
    ctx.obj.setdefault("resizer", default_resizer)


@cli.command(name="url", aliases=["u"])
@click.argument("path")
@dimension_options
@click.option("--secure", is_flag=True, help="Rewrite http urls to https")
@click.pass_obj
def url(ctx, path, action, width, height, secure):
    """Resolve (and generate if needed) the url of a derivative"""
    result = ctx["resizer"]().resolve(
        path,
        width,
        height,
        action,
        context=schemas.RequestContext(secure=secure),
    )
    exit_with(result)


@cli.command(name="path", aliases=["p"])
@click.argument("path")
@dimension_options
@click.pass_obj
def storage_path(ctx, path, action, width, height):
    """Resolve (and generate if needed) the storage path of a derivative"""
    exit_with(ctx["resizer"]().resolve(path, width, height, action, as_url=False))


@cli.command(name="derive", aliases=["d"])
@click.argument("path")
@dimension_options
def derive(path, action, width, height):
    """Print the provisional derivative path without touching storage"""
    click.echo(paths.derive(settings.dir, path, action, width, height))


@cli.command(name="serve")
@click.option("--host", default="127.0.0.1")
@click.option("--port", type=click.INT, default=8100)
def serve(host, port):
    import uvicorn

    uvicorn.run("resizeio.app:create_app", host=host, port=port, factory=True)
