"""
CLI tool for pricing a life insurance client profile.
Usage: python -m cli.quote <profile.json>
"""

import sys
import json
import logging
import argparse
from pathlib import Path

from pydantic import ValidationError

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from atlas_quote.config import get_settings
from atlas_quote.pipeline.models import ClientProfile
from atlas_quote.pipeline.orchestrator import QuotePipeline, TOTAL_STEPS
from atlas_quote.pipeline.steps.quote_summary import (
    build_input_export,
    build_plan_summary_text,
    format_multipliers,
    money,
)


# ANSI color codes for terminal output
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def print_header(text: str):
    """Print a header with formatting."""
    print(f"\n{Colors.BOLD}{Colors.BLUE}{text}{Colors.ENDC}")


def print_step(step_num: int, name: str, status: str):
    """Print step progress."""
    if status == "running":
        icon = "..."
        color = Colors.YELLOW
    elif status == "complete":
        icon = "done"
        color = Colors.GREEN
    else:
        icon = "!"
        color = Colors.RED

    print(f"  [{step_num}/{TOTAL_STEPS}] {name:<22} {color}{icon}{Colors.ENDC}")


def print_result(result):
    """Print the quote result in a formatted way."""
    if not result.success:
        print(f"\n{Colors.RED}Quote failed!{Colors.ENDC}")
        for error in result.errors:
            print(f"  Error: {error}")
        return

    profile = result.profile
    premium = result.premium

    print("\n" + "=" * 70)
    print(f"{Colors.BOLD}{Colors.GREEN}        QUOTE{Colors.ENDC}")
    print("=" * 70)

    print(f"\n{Colors.BOLD}Product:{Colors.ENDC} {profile.policy_type.label}"
          + (f" ({profile.term} yr)" if profile.policy_type.value == "Term" else ""))
    print(f"{Colors.BOLD}Death Benefit:{Colors.ENDC} {money(result.death_benefit, cents=False)}")
    print(f"{Colors.BOLD}Underwriting:{Colors.ENDC} {premium.underwriting.label}")
    if premium.bmi_info.bmi:
        print(f"{Colors.BOLD}BMI:{Colors.ENDC} {premium.bmi_info.bmi:.1f} ({premium.bmi_info.label})")

    print(f"\n{Colors.BOLD}Annual Base:{Colors.ENDC} {money(result.annual_base_premium)}")
    print(f"{Colors.BOLD}Annual Premium:{Colors.ENDC} {money(premium.annual)}")
    print(f"{Colors.BOLD}{profile.payment_mode.value} Premium:{Colors.ENDC} {money(premium.billed)}")
    print(f"  {format_multipliers(premium, profile.policy_type)}")

    print_header("Plan Recommendation")
    print(build_plan_summary_text(result.recommendation))

    if result.warnings:
        print(f"\n{Colors.YELLOW}{Colors.BOLD}Warnings:{Colors.ENDC}")
        for warning in result.warnings:
            print(f"  - {warning}")

    if result.metrics:
        print(f"\n{Colors.BOLD}Processing time:{Colors.ENDC} {result.metrics.total_duration_seconds:.3f} seconds")


def load_profile(args, parser) -> ClientProfile:
    """Read the profile from --json, a file, or stdin."""
    if args.json:
        raw = args.json
    elif args.file:
        file_path = Path(args.file)
        if not file_path.exists():
            print(f"{Colors.RED}Error: File not found: {args.file}{Colors.ENDC}")
            sys.exit(1)
        raw = file_path.read_text()
    elif not sys.stdin.isatty():
        raw = sys.stdin.read()
    else:
        parser.print_help()
        sys.exit(1)

    try:
        return ClientProfile.model_validate_json(raw)
    except ValidationError as e:
        print(f"{Colors.RED}Error: Invalid client profile{Colors.ENDC}\n{e}")
        sys.exit(1)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Price a life insurance client profile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cli.quote client.json
  python -m cli.quote --json '{"age": 40, "death_benefit": 500000}'
  python -m cli.quote client.json --json-output
  python -m cli.quote client.json --export client_summary.json
        """
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Path to a client profile JSON file"
    )
    parser.add_argument(
        "--json", "-j",
        help="Client profile as inline JSON (alternative to file)"
    )
    parser.add_argument(
        "--json-output", "-o",
        action="store_true",
        help="Output result as JSON only"
    )
    parser.add_argument(
        "--export", "-e",
        metavar="PATH",
        help="Write a versioned record of the inputs to PATH"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress output"
    )

    args = parser.parse_args()
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper() if not (args.quiet or args.json_output) else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    profile = load_profile(args, parser)

    def progress_callback(step: int, name: str, status: str):
        if not args.quiet and not args.json_output:
            print_step(step, name, status)

    if not args.quiet and not args.json_output:
        print(f"\n{Colors.BOLD}Atlas Life Quote{Colors.ENDC}")
        print("-" * 40)

    try:
        pipeline = QuotePipeline(progress_callback=progress_callback)
        result = pipeline.process(profile)

        if args.json_output:
            print(json.dumps(result.model_dump(mode="json"), indent=2))
        else:
            print_result(result)

        if args.export:
            export = build_input_export(profile, settings.export_version)
            Path(args.export).write_text(export.model_dump_json(indent=2))
            if not args.json_output:
                print(f"\n{Colors.CYAN}Inputs saved to:{Colors.ENDC} {args.export}")

        sys.exit(0 if result.success else 1)

    except Exception as e:
        if args.json_output:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            print(f"\n{Colors.RED}Error: {e}{Colors.ENDC}")
        sys.exit(1)


if __name__ == "__main__":
    main()
