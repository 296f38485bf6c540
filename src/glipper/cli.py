# src/glipper/cli.py
import argparse
import logging
import sys
from pathlib import Path

from glipper.clipboard import copy_to_clipboard
from glipper.core.aggregator import aggregate
from glipper.core.settings import default_config_path, load_config, save_config
from glipper.errors import ConfigFileError, GlipperError
from glipper.utils.tokenizer import Tokenizer


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="glipper",
        description="Glipper - utility for copying file contents to clipboard",
    )
    parser.add_argument("root_dir", type=str, nargs="?", default=None, help="Directory to copy (default: current directory)")
    parser.add_argument("--size", type=int, default=None, help="Maximum clipboard size in bytes")
    parser.add_argument(
        "--skip-binary",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip binary files instead of listing them with a placeholder",
    )
    parser.add_argument(
        "--skip-hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip hidden directories",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the collected content to this file instead of the clipboard",
    )
    parser.add_argument("--config", type=Path, default=None, help="Config file path (default: ~/.config/glipper/.glipper.conf)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("glipper")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)


def print_summary(result) -> None:
    print(f"Collected content size: {result.size} bytes")
    print("-" * 60)
    print(f"Text files:      {result.file_count}")
    print(f"Binary listed:   {result.binary_count}")
    print(f"Binary skipped:  {result.skipped_binary}")
    print(f"Large skipped:   {result.skipped_large}")
    print(f"Unreadable:      {result.unreadable}")
    print(f"Est. tokens:     {Tokenizer.count(result.content)}")
    print("-" * 60)
    if result.limit_reached:
        print("Warning: size limit reached, remaining files were omitted.")


def main(argv=None):
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)
        configure_logging(args.verbose)

        if args.size is not None and args.size <= 0:
            parser.error("--size must be a positive number of bytes")

        # 2. Config: file values, then explicit flags, then persist the merge
        config_path = args.config or default_config_path()
        config = load_config(config_path).with_overrides(
            max_output_size=args.size,
            skip_binary_files=args.skip_binary,
            skip_hidden_dirs=args.skip_hidden,
        )
        try:
            save_config(config, config_path)
        except ConfigFileError as e:
            print(f"Warning: {e}", file=sys.stderr)

        # 3. Root
        if args.root_dir is None:
            root_dir = Path.cwd()
            print("Path not specified. Using current directory.")
        else:
            root_dir = Path(args.root_dir)

        sink = args.output or "clipboard"
        print("--- glipper ---")
        print(f"Copying {root_dir} to {sink}")

        # 4. Aggregation
        try:
            result = aggregate(root_dir, config)
        except GlipperError as e:
            print(f"Error processing directory '{root_dir}': {e}", file=sys.stderr)
            sys.exit(1)

        print_summary(result)

        # 5. Output
        if args.output:
            try:
                with open(args.output, "w", encoding="utf-8", newline="\n") as f:
                    f.write(result.content)
            except OSError as e:
                print(f"Error writing file: {e}", file=sys.stderr)
                sys.exit(1)
            print(f"Success! Content written to: {args.output}")
        else:
            print("Writing to clipboard...")
            try:
                copy_to_clipboard(result.content)
            except GlipperError as e:
                print(f"Error writing to clipboard: {e}", file=sys.stderr)
                sys.exit(1)
            print("All files have been copied to clipboard")

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
