# repo_inspector/cli/interface.py
from pathlib import Path
from typing import Any, Dict

import click
from click_option_group import optgroup
import structlog

from repo_inspector import __version__ as app_version
from repo_inspector.cli.console_logger import ConsoleLogger
from repo_inspector.config.loader import build_config
from repo_inspector.config.settings import DEFAULT_CONCURRENCY, REPORT_FILENAME
from repo_inspector.core.binary import DEFAULT_NON_PRINTABLE_THRESHOLD
from repo_inspector.core.classification import DEFAULT_HEAD_SAMPLE_BYTES, DEFAULT_MAX_BYTES
from repo_inspector.core.output import render_report_json, write_to_file, write_to_stdout
from repo_inspector.core.pipeline import ReportGenerator
from repo_inspector.exceptions import RepoInspectorError
from repo_inspector.logging_setup import configure_logging

log = structlog.get_logger(__name__)

EXIT_OK = 0  # success, with or without omitted files
EXIT_USAGE = 2  # click usage errors (unknown flag, missing value, ...)
EXIT_RUNTIME = 3  # failures not attributable to user input

_list_params = ("exclude_patterns", "exclude_dirs", "exclude_files")


def _collect_cli_overrides(ctx: click.Context, cli_params: Dict[str, Any]) -> Dict[str, Any]:
    # only values typed on the command line override the project config file.
    overrides: Dict[str, Any] = {}
    for name, value in cli_params.items():
        if ctx.get_parameter_source(name) != click.core.ParameterSource.COMMANDLINE:
            continue
        overrides[name] = list(value) if name in _list_params else value
    return overrides


@click.group(context_settings=dict(help_option_names=["-h", "--help"]), invoke_without_command=True)
@click.version_option(version=app_version, prog_name="repo-inspector", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context):
    """repo-inspector: discover repository files and classify them as code,
    config, or omitted (with a reason)."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main_cli_group.command("help")
@click.pass_context
def help_command(ctx: click.Context):
    """Show this message and exit."""
    click.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


@main_cli_group.command("generate", context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Input & Output", help="Where to scan and where to put the report.")
@optgroup.option("--repo", "repo_path", type=click.Path(path_type=Path), default=None, help="Target repository path. Default: current directory.")
@optgroup.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), default=None, help=f"Directory to write {REPORT_FILENAME} to.")
@optgroup.option("--json", "json_output", is_flag=True, default=False, help="Print the JSON report to stdout; console lines move to stderr.")
@optgroup.group("Filtering Options", help="Extra exclusions on top of the built-in tables.")
@optgroup.option("-e", "--exclude", "exclude_patterns", multiple=True, help="Gitignore-style glob of paths to exclude.")
@optgroup.option("--exclude-dir", "exclude_dirs", multiple=True, help="Directory name to prune (case-insensitive).")
@optgroup.option("--exclude-file", "exclude_files", multiple=True, help="File name to skip (case-insensitive).")
@optgroup.group("Classification Tuning", help="Limits used by the classification stages.")
@optgroup.option("--max-bytes", "max_bytes", type=click.IntRange(min=0), default=DEFAULT_MAX_BYTES, show_default=True, help="Files larger than this are omitted.")
@optgroup.option("--head-sample-bytes", "head_sample_bytes", type=click.IntRange(min=1), default=DEFAULT_HEAD_SAMPLE_BYTES, show_default=True, help="Bytes sampled for the binary check.")
@optgroup.option("--non-printable-threshold", "non_printable_threshold", type=click.FloatRange(0.0, 1.0), default=DEFAULT_NON_PRINTABLE_THRESHOLD, show_default=True, help="Non-printable ratio above which a sample is binary.")
@optgroup.option("--nul-binary/--no-nul-binary", "treat_nul_as_binary", default=True, show_default=True, help="Treat any NUL byte in the sample as binary.")
@optgroup.option("--concurrency", "concurrency", type=click.IntRange(min=1), default=DEFAULT_CONCURRENCY, show_default=True, help="Files classified concurrently.")
@optgroup.group("Application Behavior")
@optgroup.option("--debug", "debug", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def generate_command(ctx: click.Context, repo_path: Path, **cli_params: Any):
    """Discover and classify the files of a repository."""
    debug = cli_params.get("debug", False)
    configure_logging(log_level_str="debug" if debug else "warning")
    log.debug("cli_command_invoked", params={k: str(v) for k, v in cli_params.items()})

    console = ConsoleLogger(scope="CLI", debug_enabled=debug, all_to_stderr=cli_params.get("json_output", False))
    exit_code = EXIT_OK
    try:
        config = build_config(repo_path or Path.cwd(), _collect_cli_overrides(ctx, cli_params))
        if config.debug and not debug:
            configure_logging(log_level_str="debug")
        console.set_debug(config.debug)

        report = ReportGenerator(config, logger=console).generate()

        if config.json_output:
            write_to_stdout(render_report_json(report))
        if config.report_path:
            write_to_file(config.report_path, render_report_json(report))
            console.info(f"Report written to: {config.report_path}")
        console.success("Done.")
    except RepoInspectorError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        console.error(f"Error: {e}")
        exit_code = EXIT_RUNTIME
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        console.error(f"Unexpected error: {e}")
        exit_code = EXIT_RUNTIME

    if exit_code != EXIT_OK:
        ctx.exit(exit_code)
