import unittest

from commiat.config.format_config import FormatConfig
from commiat.llm.prompts import build_commit_prompt, build_grouping_prompt


DIFF = "diff --git a/app.py b/app.py\n+print('hi')\n"


class TestBuildCommitPrompt(unittest.TestCase):
    def test_default_format(self) -> None:
        prompt = build_commit_prompt(DIFF)
        self.assertIn(DIFF, prompt)
        self.assertIn('The desired commit message format is: "{type}: {msg}"', prompt)
        self.assertNotIn("Variable descriptions", prompt)
        self.assertTrue(prompt.endswith("specified format and variable descriptions."))

    def test_custom_variables_are_described(self) -> None:
        config = FormatConfig(
            format="{type}({scope}): {msg}",
            variables={"scope": "Area of the code", "unused": "Not in the format"},
        )
        prompt = build_commit_prompt(DIFF, config)
        self.assertIn('"{type}({scope}): {msg}"', prompt)
        self.assertIn("- {scope}: Area of the code", prompt)
        self.assertNotIn("unused", prompt)

    def test_system_values_only_when_used(self) -> None:
        config = FormatConfig(format="{type}: {msg} [{gitBranch}]")
        prompt = build_commit_prompt(DIFF, config, {"gitBranch": "feature/login"})
        self.assertIn("System variable values", prompt)
        self.assertIn("- {gitBranch}: feature/login", prompt)

        plain = build_commit_prompt(DIFF, FormatConfig(), {"gitBranch": "main"})
        self.assertNotIn("System variable values", plain)

    def test_empty_system_value_shown_as_na(self) -> None:
        config = FormatConfig(format="{msg} ({gitBranch})")
        prompt = build_commit_prompt(DIFF, config, {"gitBranch": ""})
        self.assertIn("- {gitBranch}: N/A", prompt)


class TestBuildGroupingPrompt(unittest.TestCase):
    def test_asks_for_json_groups(self) -> None:
        prompt = build_grouping_prompt(DIFF)
        self.assertTrue(prompt.endswith(DIFF))
        self.assertIn('"group"', prompt)
        self.assertIn('"files"', prompt)
        self.assertIn('"description"', prompt)
        self.assertIn("JSON array", prompt)


if __name__ == "__main__":
    unittest.main()
