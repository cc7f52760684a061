import sys
from pathlib import Path
from typing import Any, Dict

import click
from click_option_group import optgroup
import structlog

from findimports import __version__ as app_version
from findimports.config.settings import (
    FinderConfig, Language, OutputFormat, DEFAULT_LANGUAGE, DEFAULT_OUTPUT_FORMAT,
)
from findimports.config.loader import load_and_merge_configs, select_profile
from findimports.logging_setup import configure_logging
from findimports.core.output import write_to_stdout, write_to_file
from findimports.core.pipeline import ImportFinder
from findimports.exceptions import FindImportsError, ConfigError

log = structlog.get_logger(__name__)

def _coerce_config_values(values: Dict[str, Any]) -> Dict[str, Any]:
    # turns raw toml values into FinderConfig field types.
    coerced: Dict[str, Any] = {}
    if "statements" in values:
        statements = values["statements"]
        if isinstance(statements, str):
            statements = [statements]
        if not isinstance(statements, list) or not all(isinstance(s, str) for s in statements):
            raise ConfigError("'statements' must be a string or a list of strings")
        coerced["statements"] = statements
    if "statement_files" in values:
        files = values["statement_files"]
        if isinstance(files, str):
            files = [files]
        coerced["statement_files"] = [Path(p) for p in files if isinstance(p, str)]
    if "language" in values:
        coerced["language"] = Language.from_string(values["language"]) or DEFAULT_LANGUAGE
    if "output_format" in values:
        coerced["output_format"] = OutputFormat.from_string(values["output_format"]) or DEFAULT_OUTPUT_FORMAT
    if values.get("output_file"):
        coerced["output_file"] = Path(values["output_file"])
    return coerced

def _build_config(source: Path, cli_params: Dict[str, Any]) -> FinderConfig:
    raw_configs_from_toml_files = load_and_merge_configs()
    effective_options = _coerce_config_values(
        select_profile(raw_configs_from_toml_files, cli_params.get("active_config_profile_name"))
    )

    # cli values win over config files
    if cli_params.get("statements"):
        effective_options["statements"] = list(cli_params["statements"])
    if cli_params.get("statement_files"):
        effective_options["statement_files"] = list(cli_params["statement_files"])
    if cli_params.get("language_str"):
        effective_options["language"] = Language.from_string(cli_params["language_str"]) or DEFAULT_LANGUAGE
    if cli_params.get("output_format_str"):
        effective_options["output_format"] = OutputFormat.from_string(cli_params["output_format_str"]) or DEFAULT_OUTPUT_FORMAT
    if cli_params.get("output_file"):
        effective_options["output_file"] = cli_params["output_file"]

    if str(source) == "-":
        effective_options["source_text"] = click.get_text_stream("stdin").read()
    else:
        effective_options["source_path"] = source

    log.debug("effective_config_built", options={k: str(v) for k, v in effective_options.items() if k != "source_text"})
    return FinderConfig(**effective_options)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("source", type=click.Path(dir_okay=False, allow_dash=True, path_type=Path))
@optgroup.group("Desired Statements", help="The import or require statements to look up in SOURCE.")
@optgroup.option("-s", "--statement", "statements", multiple=True, help="A desired import/require statement, e.g. \"import {foo as bar} from 'baz'\".")
@optgroup.option("-S", "--statements-file", "statement_files", multiple=True, type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path), help="File whose top-level statements are all desired statements.")
@optgroup.group("Parsing & Output", help="Grammar selection and output format.")
@optgroup.option("-l", "--language", "language_str", type=click.Choice([lang.value for lang in Language]), default=None, help=f"Grammar for parsing. Default: {DEFAULT_LANGUAGE.value} (from the file extension).")
@optgroup.option("-F", "--output-format", "output_format_str", type=click.Choice([f.value for f in OutputFormat]), default=None, help=f"Output format. Default: {DEFAULT_OUTPUT_FORMAT.value}.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the output to.")
@optgroup.group("Application Behavior", help="Configuration profiles and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="findimports", prog_name="findimports", help="Show version and exit.")
@click.pass_context
def main_cli(ctx: click.Context, source: Path, **cli_params: Any):
    """findimports: map the aliases of desired import/require statements to
    the bindings SOURCE already has for the same module exports."""

    log_level = "warning"
    if cli_params.get("verbosity_level", 0) == 1: log_level = "info"
    elif cli_params.get("verbosity_level", 0) >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs_cli", False))

    log.debug("cli_command_invoked", source=str(source), params=cli_params)

    try:
        final_config = _build_config(source, cli_params)
        finder = ImportFinder(final_config)
        finder.run()
        output_to_write = finder.render()

        if final_config.output_file:
            write_to_file(final_config.output_file, output_to_write)
            click.echo(f"Info: Output written to: {final_config.output_file}", err=True)
        else:
            write_to_stdout(output_to_write)

    except FindImportsError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except click.ClickException as e:
        log.error("click_exception_in_cli", error_type=type(e).__name__, message=str(e))
        e.show(); sys.exit(e.exit_code)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)
