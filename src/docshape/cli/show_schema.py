import click
import yaml

from docshape.cli.utils import configure_logging, output_error, output_result
from docshape.schema import read_schema


@click.command(name="show-schema")
@click.argument("schema_path", metavar="SCHEMA", type=click.Path(dir_okay=False))
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def show_schema(schema_path: str, json_output: bool, debug: bool) -> None:
    """Check a schema file and print the parsed schema tree.

    Unset constraints are omitted and defaulted modifiers are shown
    explicitly, so the output is what the validator will actually use.

    Examples:
        docshape show-schema order-schema.yaml
        docshape show-schema order-schema.json --json-output
    """
    configure_logging(debug)

    try:
        schema = read_schema(schema_path)
    except Exception as e:
        output_error(e, json_output, debug)
        return

    if json_output:
        output_result(schema.to_dict(), json_output)
    else:
        click.echo(yaml.safe_dump(schema.to_dict(), sort_keys=False, allow_unicode=True), nl=False)
