#!/usr/bin/env python3
"""Interactive question flows (publish confirmation, GitHub settings, config menu).

Everything that talks to the terminal lives here so the pipeline itself only
ever receives fully resolved values.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from configs.config import Config
from configs.config_store import ANTHROPIC, GITHUB, ConfigStore
from utils.change_models import GitHubSettings

logger = logging.getLogger(__name__)

console = Console()


def mask_secret(value: Optional[str]) -> str:
    if not value:
        return "[dim]not set[/dim]"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}...{value[-4:]}"


def _ask_required(label: str, default: Optional[str] = None, password: bool = False) -> str:
    kwargs = {"password": password, "console": console}
    if default:
        # never echo a stored secret back as the visible default
        kwargs.update(default=default, show_default=not password)
    while True:
        answer = Prompt.ask(label, **kwargs)
        if answer and answer.strip():
            return answer.strip()
        console.print(f"[bold red]{label} is required[/bold red]")


def confirm_publish() -> bool:
    return Confirm.ask("[bold cyan]Would you like to publish this PR to GitHub?[/bold cyan]", default=False, console=console)


def confirm_save_settings(path: str) -> bool:
    return Confirm.ask(f"[bold cyan]Save these GitHub settings to {path}?[/bold cyan]", default=True, console=console)


def prompt_github_settings(
    current: Optional[GitHubSettings] = None,
    branch_lookup: Optional[Callable[[], str]] = None,
) -> GitHubSettings:
    """Ask for GitHub settings; the head branch default comes from ``branch_lookup``."""
    head_default = current.head_branch if current else None
    if not head_default:
        head_default = Config.CURRENT_BRANCH_SENTINEL
        if branch_lookup:
            try:
                head_default = branch_lookup()
            except Exception as e:
                logger.debug(f"Could not determine current branch for default: {e}")

    token = _ask_required(
        "Enter your GitHub Personal Access Token",
        default=current.token if current else None,
        password=True,
    )
    owner = _ask_required(
        "Enter the repository owner (username or organization)",
        default=current.owner if current else None,
    )
    repo = _ask_required("Enter the repository name", default=current.repo if current else None)
    base = Prompt.ask(
        "Enter the base branch",
        default=current.base_branch if current else Config.DEFAULT_BASE_BRANCH,
        console=console,
    )
    head = Prompt.ask(
        f"Enter the head branch ('{Config.CURRENT_BRANCH_SENTINEL}' follows the checked-out branch)",
        default=head_default,
        console=console,
    )
    return GitHubSettings(token=token, owner=owner, repo=repo, base_branch=base, head_branch=head)


def show_config(store: ConfigStore) -> None:
    gh = store.get(GITHUB)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("GitHub token", mask_secret(gh.get("token")))
    table.add_row("GitHub owner", gh.get("owner") or "[dim]not set[/dim]")
    table.add_row("GitHub repo", gh.get("repo") or "[dim]not set[/dim]")
    table.add_row("Base branch", gh.get("baseBranch") or Config.DEFAULT_BASE_BRANCH)
    table.add_row("Head branch", gh.get("headBranch") or Config.CURRENT_BRANCH_SENTINEL)
    table.add_row("Anthropic API key", mask_secret(store.get(ANTHROPIC, "apiKey")))
    console.print(Panel(table, title=f"[bold cyan]Configuration ({store.path})", border_style="cyan"))


def run_config_flow(store: ConfigStore, branch_lookup: Optional[Callable[[], str]] = None) -> None:
    """Configuration menu: edit GitHub settings, cache an API key or clear everything."""
    while True:
        show_config(store)
        choice = Prompt.ask(
            "[bold cyan]What would you like to do?[/bold cyan] "
            "(1) Set GitHub settings (2) Set Anthropic API key (3) Clear configuration (4) Exit",
            choices=["1", "2", "3", "4"],
            default="4",
            console=console,
        )
        if choice == "1":
            settings = prompt_github_settings(store.github_settings(), branch_lookup)
            store.set_github_settings(settings)
            console.print("[bold green]✔ GitHub settings saved[/bold green]")
        elif choice == "2":
            api_key = _ask_required("Enter your Anthropic API key", password=True)
            store.set_anthropic_api_key(api_key)
            console.print("[bold green]✔ Anthropic API key saved[/bold green]")
        elif choice == "3":
            if Confirm.ask("[bold red]Delete all stored configuration?[/bold red]", default=False, console=console):
                store.clear()
                console.print("[yellow]Configuration cleared[/yellow]")
        else:
            return
