"""
asvprep CLI - Argument parsing and dispatch.

Responsibilities:
- Argument parsing
- Logging setup
- Config resolution
- Exit codes

Forbidden:
- No stage imports (the pipeline imports only the selected stages)
- No filesystem actions before arguments are accepted
"""

import argparse
import logging
import sys

from asvprep import __version__


logger = logging.getLogger(__name__)

EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="asvprep",
        description="Prepare the ASVspoof 2019 LA corpus in Kaldi/ESPnet layout.",
        epilog=(
            "Stages:\n"
            "  1  Download ASVspoof LA.zip\n"
            "  2  Protocol modification for conformity with ESPnet\n"
            "  3  Making Kaldi style files and trials\n"
            "  4  Data Preparation for train\n"
            "  5  Download Musan and RIR_NOISES for augmentation"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--stage",
        type=int,
        metavar="N",
        help="First stage to run (default: 1).",
    )
    parser.add_argument(
        "--stop_stage", "--stop-stage",
        dest="stop_stage",
        type=int,
        metavar="N",
        help="Last stage to run (default: 100000).",
    )
    parser.add_argument(
        "--n_proc", "--n-proc",
        dest="n_proc",
        type=int,
        metavar="N",
        help="Parallelism hint (default: 8). Recorded, not used by any stage.",
    )
    parser.add_argument(
        "--data_dir_prefix", "--data-dir-prefix",
        dest="data_dir_prefix",
        metavar="PATH",
        help=(
            "Root dir to save datasets (default: $ASVSPOOF_LA, "
            "else $MAIN_ROOT/egs2/asvspoof, else ./downloads)."
        ),
    )
    parser.add_argument(
        "--trg_dir", "--trg-dir",
        dest="trg_dir",
        metavar="PATH",
        help="Root for Kaldi-style output directories (default: data).",
    )
    parser.add_argument(
        "--include_spoof", "--include-spoof",
        dest="include_spoof",
        action="store_true",
        default=None,
        help="Keep spoofed training utterances (speaker 'spoof') in stage 4.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="JSON file with any of the options above.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("positional", nargs="*", help=argparse.SUPPRESS)
    return parser


def cmd_prepare(args: argparse.Namespace) -> int:
    """
    Resolve configuration and run the pipeline.

    Returns exit code.
    """
    from asvprep.config import ConfigError, build_config, load_config_file
    from asvprep.pipeline import run_pipeline

    file_values = {}
    if args.config:
        try:
            file_values = load_config_file(args.config)
        except ConfigError as e:
            logger.error("%s", e)
            return EXIT_USAGE

    cli_values = {
        "stage": args.stage,
        "stop_stage": args.stop_stage,
        "n_proc": args.n_proc,
        "data_dir_prefix": args.data_dir_prefix,
        "trg_dir": args.trg_dir,
        "include_spoof": args.include_spoof,
    }
    cfg = build_config(cli_values, file_values)
    return run_pipeline(cfg)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    from asvprep.utils import setup_logging

    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or "INFO")
    logger.info("asvprep %s", " ".join(sys.argv[1:] if argv is None else argv))

    if args.positional:
        logger.error("Error: No positional arguments are required.")
        sys.exit(EXIT_USAGE)

    sys.exit(cmd_prepare(args))
