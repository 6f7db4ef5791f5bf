#!/usr/bin/env python3

import argparse
import io
import logging
import sys
import time
from collections import Counter

from simplener import Recognizer, SimpleNerError, __version__
from simplener.io import (
    default_value_id,
    load_descriptors,
    populate_dictionary,
    read_content,
    write_results,
)

logger = logging.getLogger("ner")


def show_match_statistics(match_counts: Counter, record_count: int, top: int = 10):
    """Display how often the most frequent descriptors were recognized."""
    total = sum(match_counts.values())
    sys.stderr.write("=== Recognition Statistics ===\n")
    sys.stderr.write(f"Content records: {record_count}\n")
    sys.stderr.write(f"Matches: {total}\n")
    sys.stderr.write(f"Distinct descriptors: {len(match_counts)}\n")
    if match_counts:
        sys.stderr.write(f"\nTop {min(top, len(match_counts))} descriptors:\n")
        for value_id, count in match_counts.most_common(top):
            sys.stderr.write(f"  {value_id}: {count}\n")
    sys.stderr.write("==============================\n\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recognize descriptor terms in tab-separated content records."
    )
    parser.add_argument(
        "descriptor_file", nargs="?", help="Path to descriptor XML (MeSH format)"
    )
    parser.add_argument(
        "content_file", nargs="?", help="Path to content file of 'id<TAB>text' lines"
    )
    parser.add_argument(
        "output_file",
        nargs="?",
        default=None,
        help="Write results to this file (UTF-8, LF line endings). If omitted, output goes to stdout.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all progress updates",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a term belongs to more than one descriptor instead of keeping the last",
    )
    parser.add_argument(
        "--show-stats",
        action="store_true",
        help="Show match counts per descriptor",
    )
    parser.add_argument(
        "--show-timing",
        action="store_true",
        help="Show detailed timing information",
    )
    return parser


def run(args) -> int:
    """Load the vocabulary, recognize every content record and write the results."""
    overall_start_time = time.time()

    def progress(message: str):
        if not args.quiet:
            sys.stderr.write(message + "\n")

    progress("Loading descriptor list...")
    load_start = time.time()
    descriptors = load_descriptors(args.descriptor_file)
    recognizer = Recognizer()
    term_count = populate_dictionary(recognizer.dictionary, descriptors, strict=args.strict)
    load_time = time.time() - load_start
    logger.info(
        "Dictionary built from %s descriptors (%s terms, %s distinct)",
        len(descriptors),
        term_count,
        len(recognizer.dictionary),
    )
    if args.show_timing:
        sys.stderr.write(f"Dictionary loading time: {load_time:.3f}s\n")

    progress("Reading content list...")
    records = read_content(args.content_file)

    progress("Recognizing named entities...")
    recognize_start = time.time()
    match_counts = Counter()

    def counted(results):
        for record_id, match in results:
            match_counts[default_value_id(match.value)] += 1
            yield record_id, match

    if args.output_file:
        output_stream = open(args.output_file, "w", encoding="utf-8", newline="\n")
    else:
        output_stream = sys.stdout

    try:
        written = write_results(
            output_stream, counted(recognizer.recognize_many(records))
        )
    finally:
        if args.output_file and output_stream is not sys.stdout:
            output_stream.close()

    recognize_time = time.time() - recognize_start
    progress(f"Found {written} matches across {len(records)} records")

    if args.show_stats:
        show_match_statistics(match_counts, len(records))

    if args.show_timing:
        sys.stderr.write(f"Recognition time: {recognize_time:.3f}s\n")
        sys.stderr.write(
            f"Overall processing time: {time.time() - overall_start_time:.3f} seconds\n"
        )

    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"simplener: {__version__}")
        return 0

    if not args.descriptor_file or not args.content_file:
        parser.error("the following arguments are required: descriptor_file, content_file")

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )

    try:
        return run(args)
    except (SimpleNerError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    # Ensure UTF-8 encoding for stdout
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    sys.exit(main())
