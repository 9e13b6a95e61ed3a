"""Compile intent definitions into an NLU engine training payload.

Reads a JSON definitions file, compiles every intent, and writes the
annotated examples plus the synthesized catch-all entities as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from intentforge.compiler.batch import CompilationResult, compile_intents
from intentforge.compiler.errors import IntentCompilationError
from intentforge.compiler.example_compiler import IntentExampleCompiler
from intentforge.config import Config
from intentforge.entities.registry import EntityTypeRegistry
from intentforge.entities.resolver import MappingEntityResolver
from intentforge.tools.definitions import load_definitions

logger = logging.getLogger(__name__)
LOGGER_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER_NAME = "intentforge"
_COMPILE_HANDLER_TAG = "_intentforge_compile_handler"


def configure_compile_logging(level: int | str) -> logging.Logger:
    """Configure package-scoped logging for the compile CLI.

    The root logger is left untouched; repeated calls replace the handler
    installed by a previous call.

    Args:
        level: Logging level name or number.

    Returns:
        Configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        if getattr(handler, _COMPILE_HANDLER_TAG, False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOGGER_FORMAT))
    setattr(handler, _COMPILE_HANDLER_TAG, True)
    package_logger.addHandler(handler)
    return package_logger


def build_resolver(mapping_path: Path | None) -> MappingEntityResolver:
    """Build the native entity resolver, optionally from a mapping file."""
    if mapping_path is None:
        return MappingEntityResolver()
    return MappingEntityResolver.from_file(mapping_path)


def compile_definitions(
    definitions_path: Path,
    mapping_path: Path | None = None,
    max_workers: int = 1,
    skip_invalid: bool = False,
    registry: EntityTypeRegistry | None = None,
) -> CompilationResult:
    """Load a definitions file and compile all of its intents.

    Args:
        definitions_path: JSON definitions file.
        mapping_path: Optional JSON entity mapping overriding the defaults.
        max_workers: Worker threads used for compilation.
        skip_invalid: Skip invalid intents instead of aborting.
        registry: Registry receiving the entity type descriptors.

    Returns:
        CompilationResult for the whole file.

    Raises:
        ValueError: If the definitions or mapping file is invalid, or an
            intent fails a precondition while ``skip_invalid`` is False.
    """
    registry = registry if registry is not None else EntityTypeRegistry()
    intents = load_definitions(definitions_path, registry)
    compiler = IntentExampleCompiler(build_resolver(mapping_path), registry)
    return compile_intents(
        intents,
        compiler,
        max_workers=max_workers,
        skip_invalid=skip_invalid,
    )


def render_compile_summary(
    result: CompilationResult,
    demoted: Sequence[str] = (),
) -> list[str]:
    """Render summary lines for CLI output."""
    lines = [
        "COMPILE SUMMARY",
        "=" * 60,
        f"Intents compiled:        {len(result.intents)}",
        f"Training examples:       {result.example_count}",
        f"Synthesized entities:    {len(result.entities)}",
        f"Degraded entity types:   {', '.join(demoted) if demoted else 'none'}",
        f"Skipped intents:         "
        f"{', '.join(result.skipped) if result.skipped else 'none'}",
    ]
    return lines


def write_payload(result: CompilationResult, output: Path | None) -> None:
    """Write the training payload as JSON to ``output`` or stdout."""
    payload = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if output is None:
        sys.stdout.write(payload + "\n")
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    logger.info("Wrote training payload to %s", output)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for the intent compiler."""
    parser = argparse.ArgumentParser(
        description="Compile intent definitions into an NLU training payload"
    )
    parser.add_argument(
        "--definitions",
        type=Path,
        required=True,
        help="JSON file containing intent and entity definitions",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Where to write the payload (default: stdout)",
    )
    parser.add_argument(
        "--mapping",
        type=Path,
        help="JSON file mapping entity names to native engine entities",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of worker threads (default: INTENTFORGE_MAX_WORKERS or 1)",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip intents with missing names, entities or fragments",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as e:
        parser.error(str(e))

    configure_compile_logging("DEBUG" if args.verbose else config.log_level)

    max_workers = args.workers if args.workers is not None else config.max_workers
    if max_workers < 1:
        parser.error(f"--workers must be >= 1 (got {max_workers})")

    registry = EntityTypeRegistry()
    try:
        result = compile_definitions(
            definitions_path=args.definitions,
            mapping_path=args.mapping or config.entity_mapping_path,
            max_workers=max_workers,
            skip_invalid=args.skip_invalid or config.skip_invalid,
            registry=registry,
        )
    except IntentCompilationError as e:
        logger.error("Compilation failed: %s", e)
        raise SystemExit(1) from e
    except (OSError, ValueError) as e:
        parser.error(str(e))

    write_payload(result, args.output)

    # Keep stdout clean for the payload when no output file is given.
    summary_stream = sys.stderr if args.output is None else sys.stdout
    print(file=summary_stream)
    for line in render_compile_summary(result, registry.demoted()):
        print(line, file=summary_stream)


if __name__ == "__main__":
    main()
