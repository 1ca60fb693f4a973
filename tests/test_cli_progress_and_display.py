"""Tests for CLI progress indicators and display utilities."""

import unittest
from unittest.mock import patch

from commiat.cli import (
    CliReporter,
    ProgressIndicator,
    _plural,
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
    report_provider_failure,
)
from commiat.config.loader import ProviderConfig
from commiat.grouping.group_model import NormalizedGroup
from commiat.llm.base import AuthFailure, ServerFailure
from commiat.sequencer import MultiCommitResult


class TestProgressIndicator(unittest.TestCase):
    """Tests for ProgressIndicator context manager."""

    @patch('commiat.cli.click.echo')
    @patch('commiat.cli.time.time')
    def test_progress_with_spinner(self, mock_time, mock_echo):
        mock_time.side_effect = [0.0, 1.5]

        with ProgressIndicator("Processing", show_spinner=True):
            pass

        self.assertEqual(mock_echo.call_count, 2)
        self.assertIn("Processing", str(mock_echo.call_args_list[0]))
        self.assertIn("✓", str(mock_echo.call_args_list[1]))
        self.assertIn("1.5s", str(mock_echo.call_args_list[1]))

    @patch('commiat.cli.click.echo')
    @patch('commiat.cli.time.time')
    def test_progress_without_spinner(self, mock_time, mock_echo):
        mock_time.side_effect = [0.0, 2.3]

        with ProgressIndicator("Loading", show_spinner=False):
            pass

        self.assertIn("→", str(mock_echo.call_args_list[0]))
        self.assertIn("Done (2.3s)", str(mock_echo.call_args_list[1]))

    @patch('commiat.cli.click.echo')
    @patch('commiat.cli.time.time')
    def test_progress_marks_failure(self, mock_time, mock_echo):
        """The indicator reports failure and lets the exception through."""
        mock_time.side_effect = [0.0, 0.2]

        with self.assertRaises(RuntimeError):
            with ProgressIndicator("Fetching"):
                raise RuntimeError("boom")

        self.assertIn("✗", str(mock_echo.call_args_list[1]))


class TestDisplayFunctions(unittest.TestCase):
    @patch('commiat.cli.click.echo')
    def test_print_step(self, mock_echo):
        print_step(2, 4, "Loading Configuration")
        self.assertIn("Step 2/4: Loading Configuration", str(mock_echo.call_args_list[1]))

    @patch('commiat.cli.click.echo')
    def test_print_helpers(self, mock_echo):
        print_info("info", indent=1)
        print_success("ok")
        print_warning("careful")
        print_error("bad")

        calls = mock_echo.call_args_list
        self.assertEqual(calls[0].args[0], "  ℹ info")
        self.assertEqual(calls[1].args[0], "✓ ok")
        self.assertEqual(calls[2].args[0], "⚠ careful")
        self.assertEqual(calls[3].args[0], "✗ bad")
        self.assertTrue(calls[3].kwargs["err"])

    def test_plural(self):
        self.assertEqual(_plural(1, "file"), "1 file")
        self.assertEqual(_plural(0, "file"), "0 files")
        self.assertEqual(_plural(3, "commit"), "3 commits")


class TestCliReporter(unittest.TestCase):
    @patch('commiat.cli.click.echo')
    def test_group_started_lists_files(self, mock_echo):
        group = NormalizedGroup(name="feature", description="adds login", files=["a.py", "b.py"])
        CliReporter().group_started(1, 2, group)

        output = "\n".join(str(call.args[0]) for call in mock_echo.call_args_list)
        self.assertIn("Commit Group 1/2", output)
        self.assertIn("adds login", output)
        self.assertIn("Files (2):", output)
        self.assertIn("• b.py", output)

    @patch('commiat.cli.click.echo')
    def test_groups_planned_summary(self, mock_echo):
        groups = [
            NormalizedGroup(name="feature", description="", files=["a.py"]),
            NormalizedGroup(name="(Unassigned)", description="", files=["b.py", "c.py"], is_synthetic=True),
        ]
        CliReporter().groups_planned(groups)

        output = "\n".join(str(call.args[0]) for call in mock_echo.call_args_list)
        self.assertIn("Planned 2 commit groups", output)
        self.assertIn("Group 2: (Unassigned) - 2 files", output)

    @patch('commiat.cli.click.echo')
    def test_committed_with_hooks_skipped(self, mock_echo):
        CliReporter().group_committed(NormalizedGroup("docs", "", ["README.md"]), no_verify=True)
        self.assertIn("(hooks skipped)", mock_echo.call_args_list[0].args[0])

    @patch('commiat.cli.click.echo')
    def test_finished_without_groups(self, mock_echo):
        CliReporter().finished(MultiCommitResult(succeeded=True, committed_groups=0, total_groups=0))
        self.assertIn("No files to commit.", mock_echo.call_args_list[0].args[0])


class TestReportProviderFailure(unittest.TestCase):
    @patch('commiat.cli.click.echo')
    def test_ollama_hint_mentions_missing_key(self, mock_echo):
        config = ProviderConfig(provider="ollama", model="llama3", base_url="http://localhost:11434", fallback_enabled=True)
        report_provider_failure(ServerFailure("status 500", provider="ollama", status=500), config)

        output = "\n".join(str(call.args[0]) for call in mock_echo.call_args_list)
        self.assertIn("Ensure Ollama is running at http://localhost:11434", output)
        self.assertIn("no OpenRouter API key is configured", output)

    @patch('commiat.cli.click.echo')
    def test_openrouter_auth_hint(self, mock_echo):
        config = ProviderConfig(provider="openrouter", model="m", api_key="bad")
        report_provider_failure(AuthFailure("denied", provider="openrouter", status=401), config)

        output = "\n".join(str(call.args[0]) for call in mock_echo.call_args_list)
        self.assertIn("Check your API key", output)


if __name__ == "__main__":
    unittest.main()
