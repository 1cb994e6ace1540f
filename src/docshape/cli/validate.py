import click

from docshape.cli.utils import EXIT_INVALID, configure_logging, output_error, output_result
from docshape.config import ValidationOptions
from docshape.loaders import load_document_from_file
from docshape.schema import read_schema
from docshape.validator import ShapeValidator, Verdict, get_default_registry


def format_verdict(verdict: Verdict, document: str, schema: str) -> str:
    """Format a verdict for human-readable output"""
    output = [f"Document: {document}", f"Schema: {schema}"]

    if verdict.valid:
        output.append("Status: VALID")
        return "\n".join(output)

    output.append("Status: INVALID")
    output.append("")
    output.append(f"Violations ({len(verdict.violations)}):")
    for violation in verdict.violations:
        output.append(f"  ✗ {violation.location}")
        output.append(f"    [{violation.code.value}] {violation.message}")

    return "\n".join(output)


@click.command(name="validate")
@click.argument("document", type=click.Path(dir_okay=False))
@click.option(
    "--schema", "-s", "schema_path", required=True, help="Schema file (.yaml, .yml or .json)"
)
@click.option("--fail-fast", is_flag=True, help="Stop at the first violation")
@click.option("--max-depth", type=click.IntRange(min=1), help="Maximum nesting depth to descend")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
@click.pass_context
def validate(
    ctx: click.Context,
    document: str,
    schema_path: str,
    fail_fast: bool,
    max_depth: int | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Validate a document against a schema.

    Exits with status 1 when the document does not conform and 2 when the
    schema or document cannot be loaded.

    Examples:
        docshape validate order.json --schema order-schema.yaml
        docshape validate order.json -s order-schema.yaml --json-output
        docshape validate order.json -s order-schema.yaml --fail-fast
    """
    configure_logging(debug)

    # Flags override environment settings
    env_options = ValidationOptions.from_env()
    options = ValidationOptions(
        max_depth=max_depth or env_options.max_depth,
        fail_fast=fail_fast or env_options.fail_fast,
    )

    try:
        schema = read_schema(schema_path)
        content = load_document_from_file(document)
        validator = ShapeValidator(schema, options=options, registry=get_default_registry())
        verdict = validator.validate(content)
    except Exception as e:
        output_error(e, json_output, debug)
        return

    if json_output:
        status = "ok" if verdict.valid else "invalid"
        output_result(verdict.model_dump(mode="json"), json_output, status=status)
    else:
        click.echo(format_verdict(verdict, document, schema_path))

    if not verdict.valid:
        ctx.exit(EXIT_INVALID)
