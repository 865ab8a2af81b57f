"""Command-line entry point.

Usage::

    storegen            # same as ``storegen store``
    storegen store      # Pinia store + Firestore actions
    storegen email      # HTML email template
    storegen function   # Firebase Cloud Function
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

from storegen.config import Config
from storegen.prompts import (
    Ask,
    ask_email_options,
    ask_function_options,
    ask_project_dir,
    ask_store_request,
)
from storegen.scaffolder.email_gen import EmailTemplateGenerator, design_summary
from storegen.scaffolder.functions_gen import CloudFunctionGenerator
from storegen.scaffolder.generator import StoreGenerator
from storegen.scaffolder.models import AuthCollectionClassifier
from storegen.utils import (
    console,
    err_console,
    print_error,
    print_success,
    print_summary_table,
    read_line,
)

COMMANDS = ("store", "email", "function")


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


async def run_store(config: Config, ask: Ask = read_line) -> list[Path]:
    """Prompt for a store and generate it."""
    classifier = AuthCollectionClassifier(config.auth_collection_nouns)
    request = ask_store_request(ask, classifier=classifier)

    written = await StoreGenerator(config).generate(request)

    print_summary_table(
        {
            "Store": request.store_name,
            "Collections": ", ".join(c.raw_name for c in request.collections),
            "Auth collections": ", ".join(c.raw_name for c in request.auth_collections) or "-",
            "Roles": ", ".join(request.flags.roles) or "-",
            "Activity logging": "yes" if request.flags.add_activity_logging else "no",
            "Files": "\n".join(str(p) for p in written),
        },
        title=f"Store {request.store_name}",
    )
    print_success(f"✅ Store {request.store_name} generated successfully.")
    return written


async def run_email(config: Config, ask: Ask = read_line) -> Path:
    """Prompt for an email design and write the HTML template."""
    console.print("✨ Create Beautiful Email Templates ✨\n")
    options = ask_email_options(ask)

    path = await EmailTemplateGenerator(config).generate(options)

    print_success(f"✅ Email template created successfully: {path}")
    console.print("Tip: Customize the template with your brand details and content")
    print_summary_table(design_summary(options), title="Design features")
    return path


async def run_function(config: Config, ask: Ask = read_line) -> Path:
    """Prompt for a Cloud Function and add it to the project's ``index.js``."""
    project_dir = config.output_dir / ask_project_dir(ask, config.functions_dir)
    generator = CloudFunctionGenerator(project_dir)
    for created in await generator.scaffold():
        console.print(f"Created {created}", markup=False)

    options = ask_function_options(ask)
    path = await generator.add_function(options)

    print_success(f'✅ Function "{options.function_name}" added to {path}')
    return path


SESSIONS = {
    "store": run_store,
    "email": run_email,
    "function": run_function,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``storegen`` / ``python -m storegen``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="storegen -- interactive Pinia/Firestore store generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  storegen\n"
            "  storegen email\n"
            "  STOREGEN_OUTPUT_DIR=./src storegen store\n"
        ),
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="store",
        choices=COMMANDS,
        help="Generator to run (default: store)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (default: environment variables)",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.load(Path(args.config)) if args.config else Config.from_env()
        asyncio.run(SESSIONS[args.command](config))
    except Exception as exc:
        print_error(f"❌ Error: {exc}")
        err_console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
