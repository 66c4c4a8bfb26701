import argparse
import sys

from api.services.cms_service import CmsTestSource
from api.services.llm_service import OpenRouterGateway
from core.answers import correct_letter, option_letter
from core.documents import find_question, iter_questions, parse_test_document
from core.errors import ViewerError
from core.logging_setup import setup_console_logging
from core.prompts import HINT, SOLUTION, GenerationRequest, get_defaults


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect CMS tests and ask the model for help")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP traffic")
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Print a test outline with answer letters")
    show.add_argument("test_id")

    commands.add_parser("prompts", help="Print the default hint and solution prompts")

    for name, help_text in (("hint", "Generate one hint"), ("solve", "Generate a solution")):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("test_id")
        command.add_argument("key", help='Question key, "<section>-<question>" (e.g. 0-3)')
    return parser.parse_args()


def show_test(test_id: str) -> None:
    document = parse_test_document(CmsTestSource().fetch_test(test_id))
    print(f"{document.name} ({document.code})")
    print(f"Duration: {document.duration} minutes, total marks: {document.marks}")
    subject = None
    for ref in iter_questions(document):
        if ref.subject != subject:
            subject = ref.subject
            print(f"\n== {subject} ==")
        answer = correct_letter(ref.problem) or "?"
        print(f"Q{ref.number} [{ref.key}] answer {answer}: {ref.problem.text[:80]}")
        for index, option in enumerate(ref.problem.options):
            print(f"    {option_letter(index)}. {option.text[:70]}")


def show_prompts() -> None:
    defaults = get_defaults()
    print("--- hint prompt ---")
    print(defaults.hint_template)
    print("\n--- solution prompt ---")
    print(defaults.solution_template)


def generate(test_id: str, key: str, kind: str) -> None:
    document = parse_test_document(CmsTestSource().fetch_test(test_id))
    problem = find_question(document, key).problem
    print(OpenRouterGateway().generate(GenerationRequest.for_problem(problem, kind)))


def main() -> None:
    args = parse_args()
    if args.verbose:
        setup_console_logging()
    try:
        if args.command == "show":
            show_test(args.test_id)
        elif args.command == "prompts":
            show_prompts()
        else:
            generate(args.test_id, args.key, HINT if args.command == "hint" else SOLUTION)
    except ViewerError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
