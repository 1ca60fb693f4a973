"""
Prompt construction for commit message and grouping requests.
"""

from __future__ import annotations

from textwrap import dedent
from typing import Dict, Optional

from commiat.config.format_config import DEFAULT_FORMAT, FormatConfig
from commiat.variables import detect_variables


TEST_PROMPT = "Say HI"


def build_commit_prompt(
    diff: str,
    format_config: Optional[FormatConfig] = None,
    system_values: Optional[Dict[str, str]] = None,
) -> str:
    """Construct the prompt asking for a single commit message.

    Parameters
    ----------
    diff : str
        Unified diff of the staged changes.
    format_config : FormatConfig, optional
        Project message format; the default ``{type}: {msg}`` is used
        when absent.
    system_values : Dict[str, str], optional
        Values of system variables such as ``gitBranch``.
    """
    fmt = format_config.format if format_config else DEFAULT_FORMAT
    prompt = dedent(
        """
        Generate a Git commit message based on the following diff.

        How to read the diff:
        1. A file is DELETED if its diff header contains "deleted file mode"; lines prefixed with '-' are what was removed.
        2. A file is ADDED if its diff header contains "new file mode".
        3. Any other file is MODIFIED.
        4. Ignore purely formatting changes (whitespace, indentation, semicolons) and focus on the logical change.
        5. Be specific: name what changed, e.g. "chore: Bump version from 1.0.0 to 1.1.0" rather than "Update file".
        6. Only mention files and changes that appear in the diff.

        Diff:
        ```diff
        """
    ).lstrip()
    prompt += f"{diff}\n```\n\n"
    prompt += f'The desired commit message format is: "{fmt}"\n'

    variables = detect_variables(fmt)
    if format_config and format_config.variables:
        described = [v for v in variables if v in format_config.variables]
        if described:
            prompt += "Variable descriptions (use these to fill the format placeholders):\n"
            for name in described:
                prompt += f"- {{{name}}}: {format_config.variables[name]}\n"

    system_values = system_values or {}
    relevant = [v for v in variables if v in system_values]
    if relevant:
        prompt += "System variable values (use these directly):\n"
        for name in relevant:
            prompt += f"- {{{name}}}: {system_values[name] or 'N/A'}\n"

    prompt += (
        "\nGenerate ONLY the commit message string, adhering strictly to the "
        "specified format and variable descriptions."
    )
    return prompt


def build_grouping_prompt(diff: str) -> str:
    """Construct the prompt asking the model to split a diff into commit groups."""
    return dedent(
        """
        You are an expert software engineer analyzing Git changes. Group the
        changes in the diff below into logical commits.

        Separate unrelated changes into different groups; documentation
        updates should not share a group with a feature implementation.
        Each group must be a cohesive unit of work. Prefer more groups over
        fewer when changes are unrelated.

        Return a JSON array of objects with:
          - "group": name of the group (e.g. "frontend UI enhancements")
          - "files": array of file paths belonging to this group
          - "description": brief description of the changes in this group

        Return only the JSON, without explanation or markdown formatting.

        Diff:
        """
    ).lstrip() + diff
