import click

from docshape.cli.show_schema import show_schema
from docshape.cli.validate import validate
from docshape.version import PACKAGE_NAME, PACKAGE_VERSION


@click.group(invoke_without_command=True)
@click.version_option(PACKAGE_VERSION, prog_name=PACKAGE_NAME)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """docshape CLI"""
    # Show help when no subcommand is provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(validate)
cli.add_command(show_schema)


if __name__ == "__main__":
    cli()
