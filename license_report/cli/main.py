import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from .._report import ReportFormat, write_report
from ..console import (
    gha_notice,
    print_banner,
    print_final_failure,
    print_final_success,
    print_resolution_summary,
    print_step_end,
    print_step_header,
    print_summary_table,
    resolution_progress,
)
from ..exceptions import ConfigurationError, LicenseReportError, ManifestReadError, ReportWriteError
from ..logging_config import VALID_LOG_LEVELS, logger, setup_logging
from ..pipeline import PipelineResult, load_manifest, resolve_manifest

LICENSE_REPORT_VERSION = __version__

DEFAULT_OUTPUT_FORMAT = ReportFormat.CSV.value
DEFAULT_OUTPUT_DIR = "."
DEFAULT_LOG_LEVEL = "INFO"
GITHUB_WORKSPACE = "/github/workspace"

# Exit code of a run interrupted with Ctrl-C
EXIT_INTERRUPTED = 130

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Config:
    """Configuration settings for a license-report run."""

    manifest: str
    output_format: str = DEFAULT_OUTPUT_FORMAT
    output_dir: str = DEFAULT_OUTPUT_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    structured_logs: bool = False

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.manifest:
            raise ConfigurationError("No manifest given. Pass MANIFEST or set MANIFEST_FILE")

        valid_formats = [f.value for f in ReportFormat]
        if self.output_format not in valid_formats:
            raise ConfigurationError(
                f"Invalid output format '{self.output_format}'. Expected one of: {', '.join(valid_formats)}"
            )

        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level '{self.log_level}'. Expected one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        output_dir = Path(self.output_dir)
        if output_dir.exists() and not output_dir.is_dir():
            raise ConfigurationError(f"Output directory '{self.output_dir}' is not a directory")


def path_expansion(path: str) -> str:
    """
    Resolve the manifest path to an absolute path.

    Inside the GitHub Actions Docker container the workspace is mounted at
    /github/workspace, so relative paths are tried there as well.

    Raises:
        ManifestReadError: If the file is not found
    """
    candidate = Path(path)
    if candidate.is_file():
        logger.info(f"Using manifest '{path}'.")
        return str(candidate.resolve())

    workspace_relative_path = Path(GITHUB_WORKSPACE) / path
    if workspace_relative_path.is_file():
        logger.info(f"Using manifest '{workspace_relative_path}'.")
        return str(workspace_relative_path)

    raise ManifestReadError(f"Manifest file not found: {path}")


def build_config(
    manifest: Optional[str] = None,
    output_format: Optional[str] = None,
    output_dir: Optional[str] = None,
    log_level: Optional[str] = None,
    structured_logs: Optional[bool] = None,
) -> Config:
    """
    Build a validated Config from CLI values, falling back to environment variables.

    Args:
        manifest: Manifest path (env: MANIFEST_FILE)
        output_format: csv or json (env: OUTPUT_FORMAT)
        output_dir: Report directory (env: OUTPUT_DIR)
        log_level: Log level (env: LOG_LEVEL)
        structured_logs: JSON logs (env: LOG_FORMAT=json)

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if structured_logs is None:
        structured_logs = os.getenv("LOG_FORMAT", "").lower() == "json"

    config = Config(
        manifest=manifest or os.getenv("MANIFEST_FILE", ""),
        output_format=(output_format or os.getenv("OUTPUT_FORMAT") or DEFAULT_OUTPUT_FORMAT).lower(),
        output_dir=output_dir or os.getenv("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
        log_level=(log_level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        structured_logs=structured_logs,
    )
    config.validate()
    return config


def run_pipeline(config: Config) -> PipelineResult:
    """
    Run the three steps of a license report with console output.

    Raises:
        ManifestReadError: Step 1 failed
        ReportWriteError: Step 3 failed
    """
    print_step_header(1, "Manifest Parsing")
    try:
        manifest = load_manifest(path_expansion(config.manifest))
    except ManifestReadError:
        print_step_end(1, success=False)
        raise

    print_summary_table(
        "Manifest",
        [
            ("Manifest type", manifest.manifest_type.value),
            ("Project", manifest.project.derived_name),
            ("Dependencies", len(manifest.dependencies)),
        ],
        show_if_empty=True,
    )
    print_step_end(1)

    result = PipelineResult(manifest=manifest)
    if manifest.is_empty():
        gha_notice(f"{manifest.path.name} declares no dependencies, nothing to report")
        return result

    print_step_header(2, "Metadata Resolution")
    with resolution_progress(len(manifest.dependencies)) as on_progress:
        result.records = resolve_manifest(manifest, on_progress=on_progress)
    print_resolution_summary(result.total, result.licenses_found, result.sparse_records)
    print_step_end(2)

    print_step_header(3, "Report Writing")
    try:
        result.report_path = write_report(manifest, result.records, config.output_dir, config.output_format)
    except ReportWriteError:
        print_step_end(3, success=False)
        raise
    print_step_end(3)

    return result


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("manifest", required=False)
@click.option(
    "-f",
    "--format",
    "output_format",
    default=None,
    help="Report format: csv or json. [env: OUTPUT_FORMAT, default: csv]",
)
@click.option(
    "-o",
    "--output-dir",
    default=None,
    help="Directory the report is written to. [env: OUTPUT_DIR, default: .]",
)
@click.option(
    "--log-level",
    default=None,
    help="DEBUG, INFO, WARNING or ERROR. [env: LOG_LEVEL, default: INFO]",
)
@click.option(
    "--structured-logs/--no-structured-logs",
    default=None,
    help="Emit JSON log lines. [env: LOG_FORMAT=json]",
)
@click.version_option(LICENSE_REPORT_VERSION, "--version", prog_name="license-report", message="%(prog)s %(version)s")
@click.pass_context
def cli(
    ctx: click.Context,
    manifest: Optional[str],
    output_format: Optional[str],
    output_dir: Optional[str],
    log_level: Optional[str],
    structured_logs: Optional[bool],
) -> None:
    """Generate a license report for the dependencies of a manifest.

    MANIFEST is a go.mod, package.json or pyproject.toml file
    [env: MANIFEST_FILE]. The report is written as
    <project>_license.<format>.
    """
    if not manifest and not os.getenv("MANIFEST_FILE"):
        print_banner(LICENSE_REPORT_VERSION)
        click.echo(ctx.get_help())
        ctx.exit(0)

    try:
        config = build_config(
            manifest=manifest,
            output_format=output_format,
            output_dir=output_dir,
            log_level=log_level,
            structured_logs=structured_logs,
        )
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print_final_failure(str(e))
        sys.exit(1)

    setup_logging(level=config.log_level, structured=config.structured_logs)
    print_banner(LICENSE_REPORT_VERSION)

    try:
        result = run_pipeline(config)
    except KeyboardInterrupt:
        logger.warning("Interrupted, no report written")
        sys.exit(EXIT_INTERRUPTED)
    except LicenseReportError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print_final_failure(str(e))
        sys.exit(1)

    if result.report_path is None:
        click.echo("Nothing to report.")
        return

    print_final_success(str(result.report_path))


def main() -> None:
    """Main entry point for license-report."""
    cli()


if __name__ == "__main__":
    main()
