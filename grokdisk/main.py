import argparse
from dataclasses import replace
from pathlib import Path

from grokdisk.config import settings
from grokdisk.domain.models import MAX_SECTOR_SIZE, is_valid_sector_size
from grokdisk.logging import DEFAULT_LOG_DIR, LoggerFactory, setup_logging
from grokdisk.services import inspection


def build_parser():
    parser = argparse.ArgumentParser(
        prog="grokdisk",
        description="Show the MBR partition offsets of raw disk images",
    )
    parser.add_argument("images", nargs="+", metavar="IMAGE", help="Raw disk image file")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose debug output")
    parser.add_argument("--trace", action="store_true", help="Enable trace output")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--hide-empty", action="store_true", help="Leave unused partition slots out of the text output"
    )
    parser.add_argument(
        "--sector-size",
        type=int,
        default=None,
        help="Bytes per sector of the imaged device (default: 512)",
    )
    parser.add_argument("--log-dir", type=Path, default=None, help="Also write log files to this directory")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.sector_size is not None and not is_valid_sector_size(args.sector_size):
        parser.error(f"--sector-size must be between 1 and {MAX_SECTOR_SIZE} bytes")

    log_dir = args.log_dir
    if log_dir is None and settings.get_bool("log_to_file"):
        log_dir = DEFAULT_LOG_DIR
    setup_logging(debug=args.debug, trace=args.trace, log_dir=log_dir)
    log = LoggerFactory.for_cli()

    layout = settings.layout_from_settings()
    if args.sector_size is not None:
        layout = replace(layout, sector_size=args.sector_size)
    log.debug(
        "Table at offset {} ({} slots x {} bytes), sector size {}",
        layout.table_offset,
        layout.slot_count,
        layout.entry_size,
        layout.sector_size,
    )

    output_format = "json" if args.json else settings.get_setting("output_format", "text")
    if output_format not in settings.OUTPUT_FORMATS:
        log.warning("Unknown output format {!r}, using text", output_format)
        output_format = "text"
    show_empty = settings.get_bool("show_empty_slots", True) and not args.hide_empty

    results = inspection.inspect_images(args.images, layout=layout)

    if output_format == "json":
        print(inspection.results_to_json(results))
    else:
        for result in results:
            if result.metadata is None:
                continue
            for line in inspection.format_metadata(result.metadata, show_empty=show_empty):
                print(line)

    failed = inspection.failed_results(results)
    for result in failed:
        log.error("{}", result.error)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
