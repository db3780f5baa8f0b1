import sys
import argparse

from review_hook.review_runner import run_review
from review_hook.utils.settings import ConfigurationError, LANGUAGE_PROFILES, load_settings


# -----------------------------
# Argument parsing
# -----------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="review-hook",
        description="Pre-commit hook: ask a local Ollama model whether modified files follow best practices",
    )
    parser.add_argument("files", nargs="*", help="Files passed by pre-commit")
    parser.add_argument("--model", type=str, default=None, help="Ollama model (env: REVIEW_HOOK_MODEL)")
    parser.add_argument("--port", type=str, default=None, help="Port for ollama serve (env: REVIEW_HOOK_PORT)")
    parser.add_argument(
        "--language",
        type=str,
        default=None,
        help=f"Language profile: {', '.join(sorted(LANGUAGE_PROFILES))} (env: REVIEW_HOOK_LANGUAGE)",
    )
    return parser


# -----------------------------
# Main Execution
# -----------------------------
def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(model=args.model, port=args.port, language=args.language)
    except ConfigurationError as e:
        # The hook is advisory: a bad configuration must not block the commit
        print(f"Configuration error: {e}")
        return 0

    return run_review(args.files, settings)


# -----------------------------
# Entry Point
# -----------------------------
if __name__ == "__main__":
    sys.exit(main())
