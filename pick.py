#!/usr/bin/env python3

import argparse
import dataclasses
import json
import logging
import sys
import time
from typing import Dict, List

import lark
from lark.exceptions import UnexpectedInput

from choices import choice_factory
from choices.choice_parser import CHOICES_DSL_VERSION, parse_file
from choices.recognizer import find_choices, recognize_choices

__version__ = "0.1.0"


def match_to_dict(utterance: str, match) -> Dict:
    """Flatten a choice match into the JSON object emitted per match."""
    return {
        "utterance": utterance,
        "start": match.start,
        "end": match.end,
        "text": match.text,
        "type": match.type_name,
        "value": match.resolution.value,
        "index": match.resolution.index,
        "score": match.resolution.score,
        "synonym": match.resolution.synonym,
    }


def read_utterances(args) -> List[str]:
    if args.utterances:
        return list(args.utterances)
    return [line.rstrip("\r\n") for line in sys.stdin]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recognize which choice an utterance selects."
    )
    parser.add_argument("choices_file", nargs="?", help="Path to choices file")
    parser.add_argument(
        "utterances",
        nargs="*",
        help="Utterances to recognize. If omitted, one utterance per line is read from stdin.",
    )
    parser.add_argument(
        "--pretty-print",
        action="store_true",
        help="Emit all results in a single pretty-printed JSON array",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--locale", default=None, help="Override the file's locale")
    parser.add_argument(
        "--max-token-distance",
        type=int,
        default=None,
        help="Override the largest gap allowed between matched tokens",
    )
    parser.add_argument(
        "--allow-partial-matches",
        action="store_true",
        help="Accept matches that miss some of a choice's tokens",
    )
    parser.add_argument(
        "--recognize-ordinals",
        action="store_true",
        help="Fall back to ordinals such as 'the second one'",
    )
    parser.add_argument(
        "--no-numbers",
        action="store_true",
        help="Do not fall back to numbers such as '2'",
    )
    parser.add_argument(
        "--find-only",
        action="store_true",
        help="Only match choice text, skip the number fallback",
    )
    parser.add_argument(
        "--render",
        choices=["inline", "list"],
        default=None,
        help="Print the choices as a prompt and exit",
    )
    parser.add_argument(
        "--show-timing",
        action="store_true",
        help="Show detailed timing information",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output to this file (UTF-8, LF line endings). If omitted, output goes to stdout.",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print("Version information:")
        print(f"  lark: {lark.__version__}")
        print(f"  pick: {__version__}")
        print(f"  DSL: {CHOICES_DSL_VERSION}")
        return 0

    if not args.choices_file:
        parser.error("the following arguments are required: choices_file")
    if args.max_token_distance is not None and args.max_token_distance < 0:
        parser.error("--max-token-distance must not be negative")

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )
    logger = logging.getLogger("pick")

    # Time parsing
    parse_start = time.time()
    try:
        document = parse_file(args.choices_file)
    except OSError as exc:
        sys.stderr.write(f"error: cannot read {args.choices_file}: {exc}\n")
        return 1
    except (UnexpectedInput, ValueError) as exc:
        sys.stderr.write(f"error: invalid choices file {args.choices_file}: {exc}\n")
        return 1
    parse_time = time.time() - parse_start

    if args.show_timing:
        sys.stderr.write(f"Choices parsing time: {parse_time:.3f}s\n")

    if args.render:
        render = choice_factory.inline if args.render == "inline" else choice_factory.list_style
        print(render(document.choices))
        return 0

    overrides = {}
    if args.locale:
        overrides["locale"] = args.locale
    if args.max_token_distance is not None:
        overrides["max_token_distance"] = args.max_token_distance
    if args.allow_partial_matches:
        overrides["allow_partial_matches"] = True
    if args.recognize_ordinals:
        overrides["recognize_ordinals"] = True
    if args.no_numbers:
        overrides["recognize_numbers"] = False
    options = dataclasses.replace(document.options, **overrides)
    logger.info(
        "Loaded %s choices from %s", len(document.choices), args.choices_file
    )

    recognize = find_choices if args.find_only else recognize_choices

    # Time recognition
    output = []
    recognize_start = time.time()
    for utterance in read_utterances(args):
        for match in recognize(utterance, document.choices, options):
            output.append(match_to_dict(utterance, match))
    recognize_time = time.time() - recognize_start

    if args.show_timing:
        sys.stderr.write(f"Recognition time: {recognize_time:.3f}s\n")

    # Output results
    output_stream = None
    if args.output:
        output_stream = open(args.output, "w", encoding="utf-8", newline="\n")
    else:
        output_stream = sys.stdout

    try:
        if args.pretty_print:
            json.dump(output, output_stream, indent=2)
            output_stream.write("\n")
        else:
            for item in output:
                output_stream.write(json.dumps(item))
                output_stream.write("\n")
    finally:
        if args.output and output_stream is not sys.stdout:
            output_stream.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
