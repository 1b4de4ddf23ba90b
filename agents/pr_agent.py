#!/usr/bin/env python3
"""PR description generator CLI.

Reads the local git changes against a base branch, asks the model for a
pull request description (plus an optional API sequence diagram), prints or
saves it, and optionally publishes it to GitHub.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console

from agents.pr_generator import GenerationError, PRGenerator
from clients.anthropic_client import AnthropicClient
from configs.config import Config
from configs.config_store import ConfigStore
from utils.change_models import ChangeSet
from utils.classifier import classify
from utils.demo import create_demo_changes, generate_demo_description
from utils.git_changes import GitChangeRetriever, GitChangesError
from utils.github_publisher import GithubPublisher
from utils.interactive import confirm_publish, confirm_save_settings, prompt_github_settings, run_config_flow

logger = logging.getLogger(__name__)

# status output goes to stderr so the description itself can be piped
console = Console(stderr=True)

RULE = "─" * 80


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="pr-gen",
		description="Generate pull request descriptions from local git changes using the Anthropic API",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  pr-gen --base-branch develop
  pr-gen -o PR.md --no-diagram --no-publish
  pr-gen --demo
  pr-gen --config
		"""
	)
	parser.add_argument("-k", "--api-key", help="Anthropic API key (defaults to ANTHROPIC_API_KEY or the stored key)")
	parser.add_argument("-b", "--base-branch", default=Config.DEFAULT_BASE_BRANCH, help="Base branch to compare against (default: %(default)s)")
	parser.add_argument("-o", "--output", help="Write the PR description to this file instead of printing it")
	parser.add_argument("--no-diagram", dest="diagram", action="store_false", help="Skip generating the API sequence diagram")
	parser.add_argument("--demo", action="store_true", help="Run with a canned change set; no API key or git repository needed")
	parser.add_argument("--no-publish", dest="publish", action="store_false", help="Do not offer to publish the PR to GitHub")
	parser.add_argument("--config", action="store_true", help="Manage stored GitHub and Anthropic settings")
	parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
	return parser


def resolve_api_key(cli_key: Optional[str], store: ConfigStore) -> Optional[str]:
	return cli_key or os.getenv("ANTHROPIC_API_KEY") or store.anthropic_api_key()


def print_change_overview(changes: ChangeSet) -> None:
	classification = classify(changes.files)
	console.print(f"[green]📝 Found {len(changes.files)} changed files[/green] [dim]({changes.summary})[/dim]")
	if classification.backend:
		console.print(f"[dim]Backend endpoints:[/dim] {', '.join(classification.backend)}")
	if classification.frontend:
		console.print(f"[dim]Frontend changes:[/dim] {', '.join(classification.frontend)}")


def write_output(description: str, output: Optional[str]) -> None:
	if output:
		with open(output, "w", encoding="utf-8") as f:
			f.write(description)
		console.print(f"[green]✅ PR description saved to {output}[/green]")
		return
	console.print("\n[cyan]📋 Generated PR Description:[/cyan]")
	console.print(f"[dim]{RULE}[/dim]")
	print(description)
	sys.stdout.flush()
	console.print(f"[dim]{RULE}[/dim]")


def publish_flow(description: str, store: ConfigStore, retriever: GitChangeRetriever) -> None:
	"""Ask whether to publish, resolve GitHub settings and report the outcome."""
	if not confirm_publish():
		console.print("PR description generated successfully. You can copy it manually to GitHub.")
		return

	settings = store.github_settings()
	if settings is None:
		settings = prompt_github_settings(None, retriever.current_branch)
		if confirm_save_settings(str(store.path)):
			store.set_github_settings(settings)
	else:
		console.print(f"[dim]Using stored GitHub settings for {settings.owner}/{settings.repo}[/dim]")

	console.print("Publishing PR to GitHub...")
	publisher = GithubPublisher(settings, branch_resolver=retriever.current_branch)
	try:
		result = publisher.publish(description)
	finally:
		publisher.close()

	if result.success:
		console.print("[bold green]✅ PR published successfully![/bold green]")
		console.print(f"🔗 View it here: {result.url}")
	else:
		console.print(f"[bold red]❌ Failed to publish PR:[/bold red] {result.error}")


def main(argv: Optional[List[str]] = None):
	"""CLI entry point for the PR description generator."""
	parser = build_parser()
	args = parser.parse_args(argv)

	# Set up logging
	log_level = logging.DEBUG if args.verbose else logging.INFO
	logging.basicConfig(
		level=log_level,
		format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
	)

	# Suppress verbose logs from collaborators unless in debug mode
	if not args.verbose:
		logging.getLogger("utils.git_changes").setLevel(logging.WARNING)
		logging.getLogger("clients.anthropic_client").setLevel(logging.WARNING)
		logging.getLogger("utils.github_publisher").setLevel(logging.WARNING)
		logging.getLogger("agents.pr_generator").setLevel(logging.WARNING)
		logging.getLogger("agents.diagram_agent").setLevel(logging.WARNING)

	load_dotenv()
	store = ConfigStore()
	store.load()
	retriever = GitChangeRetriever()

	client = None
	try:
		if args.config:
			run_config_flow(store, retriever.current_branch)
			sys.exit(0)

		console.print("[blue]🚀 Starting PR Generator...[/blue]")

		if args.demo:
			console.print("[yellow]Demo mode: using a canned change set, no API calls are made[/yellow]")
			changes = create_demo_changes()
			print_change_overview(changes)
			description = generate_demo_description()
		else:
			api_key = resolve_api_key(args.api_key, store)
			if not api_key:
				console.print(
					"[red]❌ Anthropic API key is required. Use --api-key, set ANTHROPIC_API_KEY, "
					"or store one with --config.[/red]\n"
					"[yellow]💡 Try --demo to see an example without an API key.[/yellow]"
				)
				sys.exit(1)

			changes = retriever.get_changes(args.base_branch)
			if changes.is_empty:
				console.print("[yellow]⚠️  No changes detected compared to base branch.[/yellow]")
				sys.exit(0)
			print_change_overview(changes)

			client = AnthropicClient(api_key)
			generator = PRGenerator(client)
			description = generator.generate(changes, generate_diagram=args.diagram)

		write_output(description, args.output)

		if args.publish and not args.demo:
			if sys.stdin.isatty():
				publish_flow(description, store, retriever)
			else:
				logger.info("stdin is not a terminal; skipping publish prompt")
		elif args.output is None:
			console.print("[yellow]\n💡 Copy the content above to use in your GitHub PR[/yellow]")
		sys.exit(0)

	except (GitChangesError, GenerationError) as e:
		console.print(f"[red]❌ Error:[/red] {e}")
		if args.verbose:
			logger.exception("Detailed error information:")
		sys.exit(1)

	except KeyboardInterrupt:
		console.print("\n[yellow]Operation cancelled by user[/yellow]")
		sys.exit(1)

	except Exception as e:
		# Unexpected error
		console.print(f"[red]Unexpected error:[/red] {e}")
		if args.verbose:
			logger.exception("Detailed error information:")
		else:
			console.print("Use --verbose for more details")
		sys.exit(1)

	finally:
		if client:
			client.close()


if __name__ == "__main__":
	main()
