"""Output formatters for VersionMatrix results."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.exceptions import MatrixWriteError
from ..core.expander import VersionProfile
from ..core.matcher import CandidateDecision
from ..core.rules import MatchRule
from ..utils.logging import get_logger
from ..utils.path_utils import ensure_parent_dir


def render_profile(profile: VersionProfile) -> str:
    """Render one profile as ``-D<component>=<version>`` flags.

    Args:
        profile: Version profile

    Returns:
        Space separated flag tokens, without a line terminator
    """
    return " ".join(f"-D{component}={version}" for component, version in profile)


def render(profiles: Sequence[VersionProfile]) -> str:
    """Render a version matrix, one ``\\n``-terminated line per profile."""
    return "".join(render_profile(profile) + "\n" for profile in profiles)


class MatrixFormatter:
    """Writes the version matrix file."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the matrix formatter.

        Args:
            output_file: Default output file path
        """
        self.output_file = output_file
        self.logger = get_logger("MatrixFormatter")

    def format_matrix(self, profiles: Sequence[VersionProfile]) -> str:
        return render(profiles)

    def save_matrix(
        self,
        profiles: Sequence[VersionProfile],
        output_file: Optional[Path] = None
    ) -> str:
        """Render and write the version matrix.

        Args:
            profiles: Profiles to write
            output_file: Output file path (uses instance default if None)

        Returns:
            The text that was written

        Raises:
            MatrixWriteError: If the file cannot be written
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        content = self.format_matrix(profiles)
        ensure_parent_dir(file_path)
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            self.logger.error(f"Failed to write version matrix to {file_path}: {e}")
            raise MatrixWriteError(f"Write version matrix failed: {e}") from e

        self.logger.info(f"Version matrix total: {len(profiles)}, list: \n{content}")
        return content


class ConsoleFormatter:
    """Rich console formatter for VersionMatrix output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()

    def format_summary(
        self,
        matched_versions: Dict[str, List[str]],
        profile_count: int,
        output_file: Optional[Path] = None
    ) -> None:
        """Show the matched versions table and a summary panel.

        Args:
            matched_versions: Component to matched versions
            profile_count: Number of generated profiles
            output_file: Where the matrix was written
        """
        self.console.print(self._create_matched_table(matched_versions))

        content = (
            f"Components: {len(matched_versions)}\n"
            f"Version profiles: {profile_count}"
        )
        if output_file:
            content += f"\nOutput: {output_file}"
        self.console.print(Panel(Text(content), title="Version matrix generated", style="green"))

    def _create_matched_table(self, matched_versions: Dict[str, List[str]]) -> Table:
        table = Table(title="Matched Versions")
        table.add_column("Component", style="cyan", no_wrap=True)
        table.add_column("Versions", style="green")
        table.add_column("Count", style="blue", justify="right")

        for component, versions in matched_versions.items():
            table.add_row(component, ", ".join(versions), str(len(versions)))
        return table

    def format_explanation(
        self,
        component: str,
        rules: Sequence[MatchRule],
        decisions: Sequence[CandidateDecision],
        fallback: Optional[List[str]] = None
    ) -> None:
        """Show how each candidate of a component fared against each rule.

        Args:
            component: Component name
            rules: The component's rules
            decisions: One decision per candidate
            fallback: Case specific versions used when nothing matched, None if disabled
        """
        table = Table(title=f"Rule evaluation for {component}")
        table.add_column("Candidate", style="cyan", no_wrap=True)
        for rule in rules:
            table.add_column(str(rule), justify="center")
        table.add_column("Result", justify="center")

        for decision in decisions:
            cells = [Text(e.verdict, style=self._get_verdict_style(e.verdict)) for e in decision.evaluations]
            result = "included" if decision.included else "dropped"
            table.add_row(decision.version, *cells, Text(result, style="green" if decision.included else "red"))

        self.console.print(table)

        if not any(d.included for d in decisions):
            if fallback:
                self.format_info(f"No candidate matched; case specific versions used: {', '.join(fallback)}")
            else:
                self.format_error(f"Component not match: {component}")

    def _get_verdict_style(self, verdict: str) -> str:
        if verdict == "match":
            return "green"
        if verdict == "excluded":
            return "red bold"
        return "dim"

    def format_error(self, error: str, details: Optional[str] = None) -> None:
        """Format and display error message.

        Args:
            error: Error message
            details: Optional error details
        """
        content = Text.assemble(("Error: ", "bold red"), error)
        if details:
            content.append(f"\n\n{details}", style="dim")
        self.console.print(Panel(content, style="red"))

    def format_info(self, message: str, title: Optional[str] = None) -> None:
        self.console.print(Panel(Text(message), title=title, style="blue"))
