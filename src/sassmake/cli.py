"""
Command-line interface for sassmake.

This module provides the `sassmake` CLI tool that generates the extra Makefile
targets for libsass, the sassc executable and the libsass plugins.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from sassmake import __version__
from sassmake.build import InvalidTargetError, MakefileOrchestrator
from sassmake.cli_utils import ErrorFormatter, PathValidator, setup_logging
from sassmake.config import BuildConfig, BuildConfigError, ManifestFormatError
from sassmake.toolchain import UnsupportedToolchainError


@dataclass
class GenerateArgs:
    """Arguments for the generate command."""

    project_dir: Path
    config: Optional[Path] = None
    compiler: Optional[str] = None
    sassc: Optional[bool] = None
    plugins: Optional[bool] = None
    profiling: Optional[bool] = None
    debug: Optional[bool] = None
    output: Optional[Path] = None
    verbose: bool = False


@dataclass
class TargetsArgs:
    """Arguments for the targets command."""

    project_dir: Path
    config: Optional[Path] = None
    compiler: Optional[str] = None
    sassc: Optional[bool] = None
    plugins: Optional[bool] = None
    verbose: bool = False


def _create_orchestrator(args) -> MakefileOrchestrator:
    config = None
    if args.config is not None:
        config = BuildConfig.load(args.config, required=True)
    return MakefileOrchestrator(
        args.project_dir,
        config=config,
        compiler=args.compiler,
        sassc=args.sassc,
        plugins=args.plugins,
        profiling=getattr(args, "profiling", None),
        debug=getattr(args, "debug", None),
    )


def _run(command, args) -> None:
    """Run a command, mapping generation errors to exit codes."""
    try:
        command(args)
    except BuildConfigError as e:
        ErrorFormatter.handle_generation_error("Configuration error", e)
    except ManifestFormatError as e:
        ErrorFormatter.handle_generation_error("Source manifest error", e)
    except UnsupportedToolchainError as e:
        ErrorFormatter.handle_generation_error("Unsupported toolchain", e)
    except InvalidTargetError as e:
        ErrorFormatter.handle_generation_error("Invalid target", e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def generate_command(args: GenerateArgs) -> None:
    """Generate the Makefile fragment.

    Examples:
        sassmake generate                    # Library and plugins
        sassmake generate --sassc            # Also build the sassc executable
        sassmake generate --debug            # Debug build
        sassmake generate --no-plugins       # Library only
        sassmake generate -o postamble.mk    # Write to a file
    """
    orchestrator = _create_orchestrator(args)
    text = orchestrator.generate()

    if args.output is None:
        sys.stdout.write(text)
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text, encoding="utf-8")
    ErrorFormatter.print_success(f"Wrote {args.output}")


def targets_command(args: TargetsArgs) -> None:
    """List targets in build order.

    Examples:
        sassmake targets
        sassmake targets --sassc --compiler gcc
    """
    orchestrator = _create_orchestrator(args)
    graph = orchestrator.graph()

    settings = orchestrator.settings
    print(f"Compiler: {settings.compiler} ({settings.os_id})")
    print()
    for target in graph.targets:
        deps = ", ".join(dep.name for dep in target.dependencies) or "-"
        print(f"  {target.name:<10} {target.kind.value:<10} {target.output}")
        print(f"  {'':<10} objects: {len(target.objects)}, depends on: {deps}")

    if graph.skipped_plugins:
        print()
        print("Skipped plugins:")
        for plugin in graph.skipped_plugins:
            note = f" - {plugin.note}" if plugin.note else ""
            print(f"  {plugin.name:<10} {plugin.state.value}{note}")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: <project_dir>/sassmake.ini if present)",
    )
    parser.add_argument(
        "--compiler",
        default=None,
        help="Compiler to link with (default: $CC or the interpreter's compiler)",
    )
    parser.add_argument(
        "--sassc",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Build the sassc cli utility",
    )
    parser.add_argument(
        "--plugins",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Build the libsass plugins (default)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )


def main(argv: Optional[List[str]] = None) -> None:
    """sassmake - generate Makefile targets for libsass and its plugins"""
    parser = argparse.ArgumentParser(
        prog="sassmake",
        description="Generate Makefile targets for libsass, sassc and libsass plugins",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"sassmake {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Print the extra Makefile rules and clean entries",
    )
    _add_common_arguments(generate_parser)
    generate_parser.add_argument(
        "--profiling",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Compile and link with gcov profiling switches",
    )
    generate_parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Compile a debug build (-O1, defines DEBUG)",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write to this file instead of stdout",
    )

    # Targets command
    targets_parser = subparsers.add_parser(
        "targets",
        help="List the targets that would be generated",
    )
    _add_common_arguments(targets_parser)

    # Parse arguments
    parsed_args = parser.parse_args(argv)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    PathValidator.validate_project_dir(parsed_args.project_dir)
    setup_logging(parsed_args.verbose)

    # Execute command
    if parsed_args.command == "generate":
        generate_args = GenerateArgs(
            project_dir=parsed_args.project_dir,
            config=parsed_args.config,
            compiler=parsed_args.compiler,
            sassc=parsed_args.sassc,
            plugins=parsed_args.plugins,
            profiling=parsed_args.profiling,
            debug=parsed_args.debug,
            output=parsed_args.output,
            verbose=parsed_args.verbose,
        )
        _run(generate_command, generate_args)
    elif parsed_args.command == "targets":
        targets_args = TargetsArgs(
            project_dir=parsed_args.project_dir,
            config=parsed_args.config,
            compiler=parsed_args.compiler,
            sassc=parsed_args.sassc,
            plugins=parsed_args.plugins,
            verbose=parsed_args.verbose,
        )
        _run(targets_command, targets_args)


if __name__ == "__main__":
    main()
