"""CLI entrypoints for teamforge commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable

from . import catalog
from . import config as config_store
from .analyzer import ProjectAnalyzer
from .catalog import AgentTemplate, CatalogError
from .config import ConfigError
from .logging import configure_logging, get_logger
from .models import ProjectAnalysis

_LOGGER = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="teamforge",
        description="Detect project technologies and suggest specialist agents.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Detect technologies, classify the project and suggest agents.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_path_argument(analyze_parser)
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis as JSON.",
    )

    init_parser = subparsers.add_parser(
        "init",
        help="Analyze the project and write .teamforge/config.json.",
    )
    _add_verbose_option(init_parser, suppress_default=True)
    _add_path_argument(init_parser)
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing configuration.",
    )

    agents_parser = subparsers.add_parser("agents", help="Browse the agent catalog.")
    _add_verbose_option(agents_parser, suppress_default=True)
    agent_commands = agents_parser.add_subparsers(dest="agents_command", required=True)

    list_parser = agent_commands.add_parser("list", help="List catalog agents.")
    list_parser.add_argument("--category", help="Only show agents in this category.")

    search_parser = agent_commands.add_parser("search", help="Search agents by keyword.")
    search_parser.add_argument("keyword")

    show_parser = agent_commands.add_parser("show", help="Show a single agent.")
    show_parser.add_argument("agent_id")

    render_parser = agent_commands.add_parser(
        "render", help="Render an agent markdown file."
    )
    render_parser.add_argument("agent_id")
    render_parser.add_argument(
        "--instructions",
        help="Custom instructions appended to the agent file.",
    )
    render_parser.add_argument(
        "--output",
        type=Path,
        help="Write the agent file here instead of printing it.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for teamforge commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "analyze":
        analysis = _analyze_or_exit(parser, args.path)
        if args.json:
            print(json.dumps(analysis.to_dict(), indent=2, sort_keys=True))
        else:
            print(_format_analysis(analysis))
    elif args.command == "init":
        _run_init(parser, Path(args.path), force=bool(args.force))
    elif args.command == "agents":
        _run_agents(parser, args)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _analyze_or_exit(parser: argparse.ArgumentParser, path: str) -> ProjectAnalysis:
    try:
        return ProjectAnalyzer().analyze(path)
    except (FileNotFoundError, NotADirectoryError, PermissionError) as exc:
        parser.exit(1, f"{exc}\n")


def _format_analysis(analysis: ProjectAnalysis) -> str:
    lines = [
        f"Project type: {analysis.project_type.value}",
        f"Technologies: {', '.join(analysis.detected_technologies) or '(none detected)'}",
        f"Files: {analysis.total_files}",
    ]
    top = sorted(analysis.file_counts.items(), key=lambda item: (-item[1], item[0]))[:10]
    if top:
        lines.append(
            "Extensions: " + ", ".join(f"{ext} ({count})" for ext, count in top)
        )
    lines.append("Suggested agents:")
    for agent in catalog.resolve_agents(analysis.suggested_agents):
        lines.append(f"  {agent.id} - {agent.description}")
    return "\n".join(lines)


def _run_init(parser: argparse.ArgumentParser, root: Path, *, force: bool) -> None:
    if config_store.config_exists(root) and not force:
        parser.exit(
            1,
            f"{config_store.config_path(root)} already exists. Use --force to overwrite.\n",
        )

    analysis = _analyze_or_exit(parser, str(root))
    resolved = root.expanduser().resolve()
    config = config_store.create_default_config(
        resolved.name,
        analysis.project_type.value,
        str(resolved),
        analysis.detected_technologies,
        active_agents=analysis.suggested_agents,
    )
    try:
        config_store.initialize_project(resolved)
        config_store.ensure_agents_dir(resolved)
        saved = config_store.save_config(config, resolved)
    except (OSError, ConfigError) as exc:
        parser.exit(1, f"teamforge init failed: {exc}\n")

    for warning in config_store.validate_config(config):
        _LOGGER.warning(warning)
    print(f"Config written to {_relativize(saved)}")


def _run_agents(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    command = args.agents_command
    if command == "list":
        if args.category:
            agents = catalog.agents_by_category(args.category)
        else:
            agents = list(catalog.load_library().agents)
        _print_agents(agents)
    elif command == "search":
        _print_agents(catalog.search_agents(args.keyword))
    elif command == "show":
        agent = _agent_or_exit(parser, args.agent_id)
        print(json.dumps(agent.to_dict(), indent=2))
    elif command == "render":
        agent = _agent_or_exit(parser, args.agent_id)
        try:
            content = catalog.render_agent_file(agent, args.instructions)
        except CatalogError as exc:
            parser.exit(1, f"{exc}\n")
        if args.output is None:
            sys.stdout.write(content)
        else:
            saved = catalog.save_agent_file(content, args.output)
            print(f"Agent written to {_relativize(saved)}")


def _agent_or_exit(parser: argparse.ArgumentParser, agent_id: str) -> AgentTemplate:
    agent = catalog.get_agent(agent_id)
    if agent is None:
        parser.exit(1, f"Agent not found: {agent_id}\n")
    return agent


def _print_agents(agents: Iterable[AgentTemplate]) -> None:
    for agent in agents:
        print(f"{agent.id:<24} {agent.category:<14} {agent.description}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
