import sys
import json
import pathlib
from typing import Optional

import typer  # type: ignore
from pydantic import ValidationError as SchemaError

# Ensure the root directory (where pyproject.toml lives) is on sys.path
ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from crosswalk import build_converter
from crosswalk.convert.annotations import schema_full_name
from crosswalk.convert.exceptions import StructuralError, ValidationError
from crosswalk.convert.validators import ValidatorRegistry
from crosswalk.helpers.edtf import parse_edtf
from crosswalk.hub.dates import format_date, format_edtf
from crosswalk.hub.models import DateType, lookup_label
from crosswalk.spokes import SPOKES, get_spoke
from crosswalk.utils.config_loader import load_settings
from crosswalk.utils.logger import LoggerManager

app = typer.Typer(help="Convert bibliographic metadata through the canonical hub record.")

cli_logger = LoggerManager.get_logger("crosswalk.cli")


@app.command()
def convert(
    spoke: str = typer.Argument(..., help="Source schema name (see `spokes`)."),
    input_path: pathlib.Path = typer.Argument(..., help="JSON Lines file with one source record per line."),
    output_path: pathlib.Path = typer.Argument(..., help="JSON Lines file to write canonical records to."),
    config: Optional[pathlib.Path] = typer.Option(None, "--config", "-c", help="YAML settings file."),
):
    """
    Converts every record of INPUT_PATH from SPOKE into canonical records.
    """
    try:
        settings = load_settings(config)
    except (FileNotFoundError, ValueError) as e:
        cli_logger.error(f"Error: invalid configuration: {e}")
        raise typer.Exit(code=2)
    LoggerManager.configure(
        level=settings.logging.level,
        log_dir=settings.logging.log_dir,
        use_json=settings.logging.json_files,
    )

    try:
        schema = get_spoke(spoke)
    except KeyError as e:
        cli_logger.error(str(e.args[0]))
        raise typer.Exit(code=2)

    if not input_path.is_file():
        cli_logger.error(f"Error: {input_path} is not a file.")
        raise typer.Exit(code=2)

    converter = build_converter()
    converted = 0
    failed = 0
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(input_path, "r", encoding="utf-8") as src, open(output_path, "w", encoding="utf-8") as out:
        for line_no, line in enumerate(src, start=1):
            if not line.strip():
                continue
            try:
                source = schema.model_validate(json.loads(line))
            except (json.JSONDecodeError, SchemaError) as e:
                failed += 1
                cli_logger.warning(
                    f"Skipping line {line_no}: {e}",
                    extra={"extra_data": {"line": line_no, "spoke": spoke}},
                )
                continue

            result = converter.to_hub(source)
            payload = result.record.model_dump(mode="json")
            if settings.convert.include_errors and result.errors:
                payload["_errors"] = result.error_messages()
            out.write(json.dumps(payload, ensure_ascii=False) + "\n")

            converted += 1
            if result.has_errors:
                failed += 1

    cli_logger.info(
        f"Converted {converted} record(s) from {input_path}",
        extra={"extra_data": {"spoke": spoke, "converted": converted, "with_errors": failed}},
    )
    typer.echo(f"Converted {converted} record(s); {failed} with errors -> {output_path}")

    if failed and settings.convert.fail_on_errors:
        raise typer.Exit(code=1)


@app.command()
def spokes():
    """
    Lists the available source schemas.
    """
    converter = build_converter()
    for name in sorted(SPOKES):
        model = SPOKES[name]
        hooks = " (computed fields)" if converter.computed_fields.has_computed_fields(model) else ""
        typer.echo(f"{name}\t{schema_full_name(model)}{hooks}")


@app.command("parse-date")
def parse_date(
    text: str = typer.Argument(..., help="Date string (EDTF, ISO 8601, decade, century, ...)."),
    date_type: str = typer.Option("", "--type", "-t", help="Date type label, e.g. issued."),
):
    """
    Parses a date string and prints the resulting DateValue.
    """
    date = parse_edtf(text, lookup_label(DateType, date_type, DateType.UNSPECIFIED))
    typer.echo(date.model_dump_json(indent=2))
    typer.echo(f"display: {format_date(date)}")
    typer.echo(f"edtf: {format_edtf(date)}")


@app.command()
def validate(
    rule: str = typer.Argument(..., help="Validator name, e.g. isbn, orcid, doi."),
    value: str = typer.Argument(..., help="Value to check."),
):
    """
    Checks a single value against a named validator.
    """
    registry = ValidatorRegistry()
    try:
        registry.validate(rule, value, {"field_name": "value"})
    except StructuralError as e:
        typer.echo(f"error: {e}")
        typer.echo(f"available: {', '.join(registry.names())}")
        raise typer.Exit(code=2)
    except ValidationError as e:
        typer.echo(f"invalid: {e.message}")
        raise typer.Exit(code=1)
    typer.echo("valid")


if __name__ == "__main__":
    app()
