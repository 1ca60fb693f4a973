"""
Command line interface for commiat.

This module defines the ``main`` click group used as the entry point of
the ``commiat`` command. Invoked without a subcommand it stages changes
if needed, asks the configured language model for a commit message (or,
in multi mode, for a grouping of the changes into several commits),
lets the user accept, edit or cancel, and commits. The ``config``,
``ollama`` and ``model select`` subcommands manage the global settings
in ``~/.commiat/config``.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Sequence

import click
from dotenv import find_dotenv, load_dotenv

from commiat import __version__
from commiat.config.format_config import (
    DEFAULT_FORMAT,
    LOCAL_CONFIG_FILENAME,
    FormatConfig,
    load_format_config,
    save_format_config,
)
from commiat.config.loader import (
    CONFIG_KEY_API_KEY,
    CONFIG_KEY_DEFAULT_MULTI,
    CONFIG_KEY_OLLAMA_BASE_URL,
    CONFIG_KEY_OLLAMA_FALLBACK,
    CONFIG_KEY_OLLAMA_MODEL,
    CONFIG_KEY_OPENROUTER_MODEL,
    CONFIG_KEY_USE_OLLAMA,
    PROVIDER_OLLAMA,
    PROVIDER_OPENROUTER,
    ConfigError,
    ProviderConfig,
    ensure_global_config_file,
    get_global_config_path,
    is_default_multi,
    is_openrouter_configured,
    load_global_config,
    load_provider_config,
    update_global_config,
)
from commiat.error_log import ErrorLog
from commiat.grouping.group_model import NormalizedGroup
from commiat.grouping.group_parser import MalformedGroupResponse
from commiat.llm.base import AuthFailure, ProviderFailure
from commiat.llm.gateway import ProviderGateway, build_gateway
from commiat.llm.ollama_client import DEFAULT_OLLAMA_BASE_URL, DEFAULT_OLLAMA_MODEL
from commiat.llm.openrouter_client import OpenRouterClient
from commiat.llm.prompts import TEST_PROMPT, build_commit_prompt
from commiat.sequencer import (
    CommitDecision,
    GroupCommitSequencer,
    MultiCommitOptions,
    MultiCommitResult,
    SequenceReporter,
)
from commiat.variables import detect_variables, get_system_variable_values, missing_variable_descriptions
from commiat.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). ``--verbose`` re-enables
# propagation for the whole package.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_NO_CHANGES = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_LLM_FAILURE = 7
EXIT_CANCELLED = 8


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str, show_spinner: bool = True):
        self.message = message
        self.show_spinner = show_spinner
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        if self.show_spinner:
            click.echo(f"⠋ {self.message}...", nl=False)
        else:
            click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - self.start_time
        mark = "✗" if exc_type is not None else "✓"
        if self.show_spinner:
            click.echo(f"\r{mark} {self.message} (took {elapsed:.1f}s)")
        else:
            click.echo(f"  {mark} Done ({elapsed:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _enable_package_logging() -> None:
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("commiat.") and not name.startswith("commiat.error_log"):
            logging.getLogger(name).propagate = True


class CliReporter(SequenceReporter):
    """Print sequencer progress to the terminal."""

    def warning(self, message: str) -> None:
        print_warning(message)

    def groups_planned(self, groups: Sequence[NormalizedGroup]) -> None:
        print_success(f"Planned {_plural(len(groups), 'commit group')}")
        for idx, group in enumerate(groups, 1):
            print_info(f"Group {idx}: {group.name} - {_plural(len(group.files), 'file')}", indent=1)

    def group_started(self, index: int, total: int, group: NormalizedGroup) -> None:
        click.echo(f"\n{'─'*60}")
        click.echo(f"📦 Commit Group {index}/{total}: {click.style(group.name, fg='cyan', bold=True)}")
        click.echo(f"{'─'*60}")
        if group.description:
            click.echo(f"   {group.description}")
        click.echo(f"\n📄 Files ({len(group.files)}):")
        for path in group.files:
            click.echo(f"   • {path}")

    def group_skipped(self, group: NormalizedGroup) -> None:
        print_warning(f"No files from '{group.name}' are part of the current changes. Skipping.")

    def group_committed(self, group: NormalizedGroup, no_verify: bool) -> None:
        suffix = " (hooks skipped)" if no_verify else ""
        print_success(f"Committed: {group.name}{suffix}")

    def cancelled(self, index: int, group: NormalizedGroup) -> None:
        print_warning(f"Commit of group {index} ({group.name}) cancelled.")

    def fell_back_to_single(self, error: MalformedGroupResponse) -> None:
        print_warning("Failed to parse the model's grouping as JSON. Falling back to a single commit.")
        print_info(f"Model response: {error.raw_text}", indent=1)

    def finished(self, result: MultiCommitResult) -> None:
        if result.total_groups == 0:
            print_info("No files to commit.")


# ---------------------------------------------------------------------------
# Interactive helpers
# ---------------------------------------------------------------------------

def _edit_message(message: str) -> str:
    """Let the user edit ``message`` in $EDITOR, or line by line without one."""
    editor = os.environ.get("EDITOR")
    if editor:
        print_info("Opening editor...")
        with tempfile.NamedTemporaryFile(mode="w+", delete=False, suffix=".txt", encoding="utf-8") as tmp:
            tmp.write(message)
            tmp_path = tmp.name
        try:
            subprocess.run([editor, tmp_path], check=True)
            with open(tmp_path, "r", encoding="utf-8") as f:
                edited = f.read().strip()
        except (OSError, subprocess.CalledProcessError) as e:
            print_error(f"Editor failed: {e}")
            return message
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
    else:
        click.echo("\n   💡 No EDITOR environment variable set.")
        click.echo("   Enter your commit message below.")
        click.echo("   End with a line containing only a period (.)")
        click.echo("")
        lines: List[str] = []
        while True:
            line = click.prompt("   ", default="", show_default=False)
            if line.strip() == ".":
                break
            lines.append(line)
        edited = "\n".join(lines).strip()

    if not edited:
        print_warning("Commit message cannot be empty, keeping the previous one")
        return message
    print_success("Message edited successfully")
    return edited


def prompt_user(message: str, group: Optional[NormalizedGroup] = None) -> CommitDecision:
    """Show the proposed message and ask to accept, edit or cancel.

    Editing returns to the prompt with the edited message so it can be
    reviewed again.
    """
    current = message
    while True:
        click.echo("\n💬 Proposed commit message:")
        click.echo("   ┌" + "─" * 56 + "┐")
        for line in current.splitlines() or [""]:
            display_line = line[:54]
            click.echo(f"   │ {display_line.ljust(54)} │")
        click.echo("   └" + "─" * 56 + "┘")
        click.echo("")
        choice = click.prompt(
            "   Choose action (A = Accept | E = Edit | C = Cancel)",
            type=click.Choice(["A", "E", "C", "a", "e", "c"], case_sensitive=False),
            default="A",
            show_choices=False,
            show_default=True,
        ).strip().lower()

        if choice == "a":
            return CommitDecision.confirmed(current)
        if choice == "c":
            return CommitDecision.cancelled()
        current = _edit_message(current)


def prompt_for_api_key() -> str:
    """Ask for the OpenRouter API key and save it in the global config."""
    print_info("OpenRouter API key not found in environment or global config.")
    api_key = click.prompt("   Please enter your OpenRouter API key", hide_input=True).strip()
    while not api_key:
        print_warning("API key cannot be empty.")
        api_key = click.prompt("   Please enter your OpenRouter API key", hide_input=True).strip()
    path = update_global_config(CONFIG_KEY_API_KEY, api_key)
    print_success(f"API key saved to {path}")
    return api_key


def ensure_format_config(repo_root: Path) -> Optional[FormatConfig]:
    """Load the local format file, offering to create it when missing.

    Custom variables without a description are prompted for and saved.
    """
    try:
        format_config = load_format_config(repo_root)
    except ConfigError as exc:
        print_warning(f"{exc} Using default format: \"{DEFAULT_FORMAT}\"")
        return None

    if format_config is None:
        print_info(f"Local config file ({LOCAL_CONFIG_FILENAME}) not found.")
        if not click.confirm(f"   No {LOCAL_CONFIG_FILENAME} found. Would you like to create one now?", default=True):
            print_info(f"Using default format: \"{DEFAULT_FORMAT}\"")
            return None
        fmt = click.prompt(
            "   Commit message format (core variables: {type}, {msg}, {gitBranch})",
            default=DEFAULT_FORMAT,
        ).strip() or DEFAULT_FORMAT
        format_config = FormatConfig(format=fmt)
        save_format_config(repo_root, format_config)
        print_success(f"Initial configuration saved to {LOCAL_CONFIG_FILENAME}")

    missing = missing_variable_descriptions(detect_variables(format_config.format), format_config)
    if missing:
        click.echo("\nSome custom variables need descriptions:")
        for name in missing:
            description = ""
            while not description:
                description = click.prompt(
                    f"   Describe the expected content for the custom variable {{{name}}}"
                ).strip()
            format_config.variables[name] = description
        save_format_config(repo_root, format_config)
        print_success(f"Updated variable descriptions saved to {LOCAL_CONFIG_FILENAME}")
    return format_config


def report_provider_failure(failure: ProviderFailure, config: ProviderConfig) -> None:
    """Print a short diagnostic for a failed generation request."""
    provider = failure.provider or "configured provider"
    print_error(f"Failed to generate text using {provider}: {failure}")
    if failure.provider == PROVIDER_OLLAMA:
        print_info(f"Ensure Ollama is running at {config.base_url} and the model is available.", indent=1)
        if config.fallback_enabled and not config.openrouter_configured:
            print_info("Fallback to OpenRouter is enabled, but no OpenRouter API key is configured.", indent=1)
    elif failure.provider == PROVIDER_OPENROUTER:
        if isinstance(failure, AuthFailure):
            print_info("OpenRouter authentication failed. Check your API key.", indent=1)
        else:
            print_info(
                f"OpenRouter request failed (Status: {failure.status or 'N/A'}). "
                "Check OpenRouter status or your network.",
                indent=1,
            )


def _make_gateway(config: ProviderConfig, error_log: ErrorLog) -> ProviderGateway:
    def on_fallback(failure: ProviderFailure) -> None:
        print_warning(
            f"Ollama request failed (Status: {failure.status or 'N/A'}, Message: {failure}). "
            "Attempting fallback to OpenRouter..."
        )

    return build_gateway(config, error_log=error_log, on_fallback=on_fallback)


def _resolve_provider_config() -> ProviderConfig:
    config = load_provider_config()
    if config.provider == PROVIDER_OPENROUTER and not config.api_key:
        config.api_key = prompt_for_api_key()
    return config


def _ensure_staged(client: GitClient, add_all: bool) -> None:
    """Stage changes when asked to, or when nothing is staged and the user agrees."""
    if add_all:
        with ProgressIndicator("Staging all changes (git add .)"):
            client.add_all()
        return
    staged = client.diff_summary(staged=True)
    if staged:
        print_info(f"{_plural(len(staged), 'file')} already staged.")
        return
    if not click.confirm("   No changes staged. Stage all changes now? (git add .)", default=True):
        print_warning("No changes staged. Aborting.")
        raise click.exceptions.Exit(EXIT_NO_CHANGES)
    with ProgressIndicator("Staging all changes (git add .)"):
        client.add_all()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@click.group(invoke_without_command=True)
@click.option("-a", "--add-all", is_flag=True, help="Stage all changes (git add .) before committing.")
@click.option("-n", "--no-verify", is_flag=True, help="Bypass git commit hooks.")
@click.option("--prefix", type=str, help='Prepend a string to the first line of the message, e.g. "[WIP]".')
@click.option("--affix", type=str, help='Append a string to the first line of the message, e.g. "(#45789)".')
@click.option("--multi", is_flag=True, help="Group changes into several logical commits using AI.")
@click.option("--untracked", is_flag=True, help="Include untracked files in multi-commit grouping.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="commiat")
@click.pass_context
def main(
    ctx: click.Context,
    add_all: bool,
    no_verify: bool,
    prefix: Optional[str],
    affix: Optional[str],
    multi: bool,
    untracked: bool,
    verbose: bool,
) -> None:
    """🤖 Auto-generate commit messages using AI (OpenRouter or Ollama with optional fallback).

    Uses staged changes by default.
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    if verbose:
        _enable_package_logging()
    load_dotenv(find_dotenv(usecwd=True))

    if ctx.invoked_subcommand is not None:
        return

    error_log = ErrorLog()
    total_steps = 4
    config: Optional[ProviderConfig] = None

    try:
        # Step 1: Detect repository
        print_step(1, total_steps, "Detecting Repository")
        repo_root = GitClient.find_repo_root(Path.cwd())
        if repo_root is None:
            print_error("No Git repository found in current directory or parent directories.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        print_success(f"Found Git repository at: {repo_root}")
        client = GitClient(repo_root)

        # Step 2: Load configuration
        print_step(2, total_steps, "Loading Configuration")
        try:
            config = _resolve_provider_config()
            if not multi and is_default_multi():
                multi = True
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        fallback_note = ", Fallback Enabled" if config.fallback_enabled else ""
        print_success(f"Using provider: {config.provider}, Model: {config.model}{fallback_note}")
        format_config = ensure_format_config(repo_root)

        # Step 3: Stage changes
        print_step(3, total_steps, "Staging Changes")
        _ensure_staged(client, add_all)

        # Step 4: Generate and commit
        print_step(4, total_steps, "Generating Commit" + ("s" if multi else ""))
        system_values = get_system_variable_values(client)

        def build_prompt(diff: str) -> str:
            return build_commit_prompt(diff, format_config, system_values)

        sequencer = GroupCommitSequencer(
            client,
            _make_gateway(config, error_log),
            prompt_user,
            build_prompt,
            reporter=CliReporter(),
        )
        options = MultiCommitOptions(
            include_untracked=untracked, no_verify=no_verify, prefix=prefix, affix=affix
        )

        if multi:
            print_info("Multi-commit mode enabled, analyzing changes to group them logically...")
            result = sequencer.run(options)
        else:
            if not client.diff_summary(staged=True):
                print_warning("No staged changes found to commit.")
                raise click.exceptions.Exit(EXIT_NO_CHANGES)
            result = sequencer.run_single(options)

        if not result.succeeded:
            print_warning("Commit cancelled.")
            raise click.exceptions.Exit(EXIT_CANCELLED)
        if result.total_groups:
            if multi and not result.fell_back_to_single:
                click.echo(f"\n🎉 Multi-commit process completed: {_plural(result.committed_groups, 'commit')} created.\n")
            else:
                click.echo("\n✅ Commit successful!\n")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except click.exceptions.Abort:
        raise
    except ProviderFailure as exc:
        error_log.record(exc)
        report_provider_failure(exc, config)
        ctx.exit(EXIT_LLM_FAILURE)
    except GitError as exc:
        error_log.record(exc)
        print_error(f"Git error: {exc}")
        ctx.exit(EXIT_VCS_FAILURE)
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        error_log.record(exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
    finally:
        error_log.close()


@main.command("config")
@click.option("-t", "--test", "test_mode", is_flag=True, help="Test the configured LLM connection and model.")
@click.option("-m", "--multi", "set_multi", is_flag=True, help="Set --multi as the default mode.")
@click.pass_context
def config_command(ctx: click.Context, test_mode: bool, set_multi: bool) -> None:
    """Manage the GLOBAL configuration (~/.commiat/config). Opens an editor by default."""
    if set_multi and test_mode:
        print_error("--test and --multi cannot be used together.")
        ctx.exit(EXIT_INVALID_USAGE)

    if set_multi:
        if click.confirm("Set --multi as the default mode for commiat?", default=True):
            path = update_global_config(CONFIG_KEY_DEFAULT_MULTI, "true")
            print_success("--multi is now enabled as default.")
        else:
            path = update_global_config(CONFIG_KEY_DEFAULT_MULTI, "false")
            print_info("--multi is now disabled as default.")
        print_info(f"Settings saved to {path}")
        return

    if test_mode:
        ctx.exit(check_llm_completion())

    print_info("Note: This command edits the GLOBAL configuration file.")
    print_info("Use 'commiat ollama' to configure Ollama settings (including fallback).")
    print_info(f"For a project-specific format, create a {LOCAL_CONFIG_FILENAME} file in your project root.")
    path = ensure_global_config_file()
    editor = os.environ.get("EDITOR") or "nano"
    print_info(f"Opening global config {path} in {editor}...")
    try:
        subprocess.run([editor, str(path)], check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        print_error(f"Failed to start editor '{editor}': {exc}")
        print_info("Make sure it is installed and in your PATH, or set the EDITOR environment variable.", indent=1)
        ctx.exit(EXIT_GENERIC_ERROR)


def check_llm_completion() -> int:
    """Send a trivial prompt through the gateway and print the answer.

    Returns
    -------
    int
        The exit code for the ``config --test`` command.
    """
    click.echo("🧪 Testing LLM completion...")
    try:
        config = _resolve_provider_config()
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        return EXIT_CONFIG_ERROR

    click.echo(f"\nUsing provider: {config.provider}")
    click.echo("Input:")
    click.echo(f'- Prompt: "{TEST_PROMPT}"')
    click.echo(f"- Model: {config.model}")
    if config.provider == PROVIDER_OLLAMA:
        click.echo(f"- Base URL: {config.base_url}")
        click.echo(f"- Fallback Enabled: {config.fallback_enabled}")

    error_log = ErrorLog()
    gateway = _make_gateway(config, error_log)
    try:
        output = gateway.generate(TEST_PROMPT)
    except ProviderFailure as exc:
        error_log.record(exc)
        report_provider_failure(exc, config)
        return EXIT_LLM_FAILURE
    finally:
        error_log.close()

    print_success("Test successful!")
    click.echo("\nOutput:")
    click.echo(f'- Response: "{output}"')
    return EXIT_SUCCESS


@main.command("ollama")
def ollama_command() -> None:
    """Configure Ollama settings (enable/disable, base URL, model, fallback)."""
    current = load_global_config()
    use_ollama = current.get(CONFIG_KEY_USE_OLLAMA) == "true"
    base_url = current.get(CONFIG_KEY_OLLAMA_BASE_URL) or DEFAULT_OLLAMA_BASE_URL
    model = current.get(CONFIG_KEY_OLLAMA_MODEL) or DEFAULT_OLLAMA_MODEL
    fallback = current.get(CONFIG_KEY_OLLAMA_FALLBACK) == "true"

    click.echo("\n--- Ollama Configuration ---")
    if use_ollama:
        click.echo(f"Current setting: Enabled (URL: {base_url}, Model: {model}, Fallback: {fallback})")
    else:
        click.echo("Current setting: Disabled")

    if not click.confirm("Enable Ollama for commit message generation?", default=use_ollama):
        update_global_config(CONFIG_KEY_USE_OLLAMA, "false")
        path = update_global_config(CONFIG_KEY_OLLAMA_FALLBACK, "false")
        print_info("Ollama disabled. commiat will use OpenRouter (if configured).")
        print_info(f"Settings saved to {path}")
        return

    new_base_url = click.prompt("Ollama base URL", default=base_url).strip() or DEFAULT_OLLAMA_BASE_URL
    new_model = click.prompt("Ollama model name", default=model).strip() or DEFAULT_OLLAMA_MODEL
    new_fallback = click.confirm(
        "Enable fallback to OpenRouter if Ollama fails (requires OpenRouter API key)?", default=fallback
    )
    update_global_config(CONFIG_KEY_USE_OLLAMA, "true")
    update_global_config(CONFIG_KEY_OLLAMA_BASE_URL, new_base_url)
    update_global_config(CONFIG_KEY_OLLAMA_MODEL, new_model)
    path = update_global_config(CONFIG_KEY_OLLAMA_FALLBACK, "true" if new_fallback else "false")
    print_success(f"Ollama enabled. Base URL: {new_base_url}, Model: {new_model}, Fallback: {new_fallback}.")
    if new_fallback and not is_openrouter_configured():
        print_warning(
            "Fallback enabled, but no OpenRouter API key is configured. "
            "Fallback will not work until an API key is set (via env or 'commiat config')."
        )
    print_info(f"Settings saved to {path}")


@main.group("model")
def model_group() -> None:
    """Manage the OpenRouter model."""


@model_group.command("select")
@click.pass_context
def model_select_command(ctx: click.Context) -> None:
    """Search and select an OpenRouter model. Recommended: google/gemini-2.5-flash-lite."""
    try:
        with ProgressIndicator("Fetching OpenRouter models"):
            models = OpenRouterClient().list_models()
    except ProviderFailure as exc:
        print_error(f"Failed to fetch models: {exc}")
        if exc.status:
            print_info(f"Status: {exc.status}", indent=1)
        ctx.exit(EXIT_LLM_FAILURE)

    if not models:
        print_warning("No models available.")
        return

    while True:
        term = click.prompt("Search models (blank lists all)", default="", show_default=False).strip().lower()
        matches = [m for m in models if term in m[0].lower() or term in m[1].lower()][:20]
        if matches:
            break
        print_warning(f"No models match '{term}'.")

    for idx, (_, label) in enumerate(matches, 1):
        click.echo(f"  {idx:>2}. {label}")
    choice = click.prompt("Select a model", type=click.IntRange(1, len(matches)))
    selected = matches[choice - 1][0]
    path = update_global_config(CONFIG_KEY_OPENROUTER_MODEL, selected)
    print_success(f"Set OpenRouter model to: {selected}")
    print_info(f"It will be used next time you run 'commiat'. You can also edit {get_global_config_path()} manually.")
    logger.debug("Saved model selection to %s", path)
