"""Main CLI interface for VersionMatrix."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import (
    CANDIDATE_VERSIONS_ENV,
    CASE_VERSIONS_FILE_ENV,
    INCLUDE_CASE_SPECIFIC_VERSION_ENV,
    OUTPUT_FILE_ENV,
    MatrixConfig,
)
from ..core.exceptions import (
    EXIT_FAILED,
    EXIT_SUCCESS,
    EXIT_UNMATCHED,
    InputError,
    UnmatchedError,
    VersionMatrixError,
)
from ..core.matcher import VersionMatcher
from ..core.parsers import CandidateVersionParser, RuleFileParser
from ..core.pipeline import MatrixResult, build_matrix
from ..output.formatters import ConsoleFormatter, MatrixFormatter
from ..utils.logging import setup_logging, get_logger
from ..utils.performance import PerformanceMonitor

app = typer.Typer(
    name="version-matrix",
    help="Expand per-component version match rules into a test version matrix",
    add_completion=False
)

console = Console()
error_console = Console(stderr=True)
logger = get_logger("CLI")


def _run(config: MatrixConfig, monitor: PerformanceMonitor) -> MatrixResult:
    """Validate the configuration, compute the matrix and write it.

    Args:
        config: Run configuration
        monitor: Performance monitor for the stage timings

    Returns:
        The computed matrix
    """
    config.validate()

    logger.info(f"{CANDIDATE_VERSIONS_ENV}: {config.candidate_versions}")
    logger.info(f"{CASE_VERSIONS_FILE_ENV}: {config.case_versions_file}")
    logger.info(f"{OUTPUT_FILE_ENV}: {config.output_file}")

    rules_text = RuleFileParser().read(config.case_versions_file)
    result = build_matrix(
        config.candidate_versions,
        rules_text,
        include_case_specific_version=config.include_case_specific_version,
        performance_monitor=monitor,
    )

    with monitor.measure("write"):
        MatrixFormatter(config.output_file).save_matrix(result.profiles)
    return result


def _fail(error: VersionMatrixError) -> NoReturn:
    """Report a fatal error and exit with its status."""
    logger.fatal(str(error))
    ConsoleFormatter(error_console).format_error(str(error))
    raise typer.Exit(error.exit_code)


@app.command()
def generate(
    candidates: Optional[str] = typer.Option(
        None,
        "--candidates",
        "-c",
        envvar=CANDIDATE_VERSIONS_ENV,
        help="Candidate versions, e.g. 'dubbo:2.7.7,2.7.8;spring:5.1.0'"
    ),
    rules_file: Optional[Path] = typer.Option(
        None,
        "--rules",
        "-r",
        envvar=CASE_VERSIONS_FILE_ENV,
        help="Case versions rule file"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        envvar=OUTPUT_FILE_ENV,
        help="Output file for the version matrix"
    ),
    include_case_specific: bool = typer.Option(
        True,
        "--include-case-specific/--no-include-case-specific",
        envvar=INCLUDE_CASE_SPECIFIC_VERSION_ENV,
        help="Use the rule file's exact versions when no candidate matches"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write log records to this file"
    ),
    performance: bool = typer.Option(
        False,
        "--performance",
        help="Show performance summary"
    )
) -> None:
    """Generate the version matrix file."""
    setup_logging(log_file=log_file, verbose=verbose)

    config = MatrixConfig(
        candidate_versions=candidates,
        case_versions_file=rules_file,
        output_file=output,
        include_case_specific_version=include_case_specific,
    )
    monitor = PerformanceMonitor(enable_memory_tracking=performance)

    try:
        result = _run(config, monitor)
    except VersionMatrixError as e:
        _fail(e)
    finally:
        monitor.close()

    ConsoleFormatter(console).format_summary(result.matched_versions, result.size, config.output_file)

    if performance:
        monitor.print_summary(console)


@app.command()
def explain(
    component: str = typer.Argument(..., help="Component to explain"),
    candidates: Optional[str] = typer.Option(
        None,
        "--candidates",
        "-c",
        envvar=CANDIDATE_VERSIONS_ENV,
        help="Candidate versions, e.g. 'dubbo:2.7.7,2.7.8;spring:5.1.0'"
    ),
    rules_file: Optional[Path] = typer.Option(
        None,
        "--rules",
        "-r",
        envvar=CASE_VERSIONS_FILE_ENV,
        help="Case versions rule file"
    ),
    include_case_specific: bool = typer.Option(
        True,
        "--include-case-specific/--no-include-case-specific",
        envvar=INCLUDE_CASE_SPECIFIC_VERSION_ENV,
        help="Use the rule file's exact versions when no candidate matches"
    )
) -> None:
    """Show how one component's candidates fare against its rules."""
    try:
        if not candidates or not candidates.strip():
            raise InputError(f"Missing candidate versions: '{CANDIDATE_VERSIONS_ENV}'")
        if rules_file is None:
            raise InputError(f"Missing case versions file: '{CASE_VERSIONS_FILE_ENV}'")

        candidate_map = CandidateVersionParser().parse_text(candidates)
        rule_map = RuleFileParser().parse(rules_file)
        rules = rule_map.get(component)
        if not rules:
            raise InputError(f"No match rules for component: {component}")
        if component not in candidate_map:
            raise UnmatchedError([(component, rules)])
    except VersionMatrixError as e:
        _fail(e)

    matcher = VersionMatcher(include_case_specific_version=include_case_specific)
    candidate_list = candidate_map[component]
    try:
        decisions = matcher.explain(rules, candidate_list)
    except VersionMatrixError as e:
        _fail(e)

    fallback = matcher.get_fallback_versions(rules)
    ConsoleFormatter(console).format_explanation(component, rules, decisions, fallback)

    if not matcher.match_component(rules, candidate_list):
        raise typer.Exit(EXIT_UNMATCHED)


@app.command()
def info() -> None:
    """Show the rule grammar and exit statuses."""
    console.print(Panel.fit(
        "[bold blue]VersionMatrix[/bold blue]\n"
        "Expands per-component version match rules into a test version matrix",
        title="Information"
    ))

    console.print("\n[bold]Rule file lines:[/bold] " + escape("component=pattern[,pattern...]"))
    console.print("  2.7.7      exact version (raw string)")
    console.print("  2.7*       wildcard")
    console.print("  !2.7.8*    exclusion, wins over any inclusion")
    console.print("  >=3.0      range bound on the qualifier-free version")
    console.print("  >2.7 <3.0  interval, both bounds must hold")

    console.print(
        f"\n[bold]Exit statuses:[/bold] {EXIT_SUCCESS} success, "
        f"{EXIT_FAILED} failure, {EXIT_UNMATCHED} nothing matched"
    )


def main() -> None:
    """Main entry point for VersionMatrix CLI."""
    app()


if __name__ == "__main__":
    main()
