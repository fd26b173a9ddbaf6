"""
Command-line driver: decode CODA files and print their records.

    coda-decode statement.cod
    coda-decode --json --keep-going *.cod
    coda-decode --csv transactions.csv statement.cod
"""
import argparse
import json
import sys
from typing import List, Optional

import pandas as pd

from coda.common.logging_config import get_logger, set_source, setup_logging
from coda.parsing.exceptions import DecodeError
from coda.parsing.facade import CodaParser

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_DECODE_ERROR = 1
EXIT_IO_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coda-decode", description="Decode CODA bank statement files.")
    parser.add_argument("files", nargs="+", help="CODA files to decode")
    parser.add_argument("--json", action="store_true", help="print one JSON object per record")
    parser.add_argument("--keep-going", action="store_true", help="report faulty lines and continue")
    parser.add_argument("--csv", metavar="PATH", help="write the transactions of all files to a CSV file")
    parser.add_argument("--encoding", help="file encoding (default: cp1252)")
    parser.add_argument("--log-file", help="also write JSON logs to this file")
    return parser


def _print_record(k: int, record, as_json: bool, out) -> None:
    if as_json:
        print(json.dumps(record.to_dict(), default=str, ensure_ascii=False), file=out)
    else:
        print(f"{k}: {record!r}", file=out)


def main(argv: Optional[List[str]] = None, out=None) -> int:
    args = build_arg_parser().parse_args(argv)
    out = out or sys.stdout
    setup_logging(log_file=args.log_file)

    parser = CodaParser(encoding=args.encoding)
    exit_code = EXIT_OK
    frames = []

    for path in args.files:
        set_source(path)
        try:
            result = parser.parse_records(path, strict=not args.keep_going)
        except OSError as e:
            logger.error(f"Error opening file {path}: {e}")
            return EXIT_IO_ERROR
        except DecodeError as e:
            print(f"{path}: {e}", file=sys.stderr)
            return EXIT_DECODE_ERROR
        finally:
            set_source(None)

        for k, record in enumerate(result.records):
            _print_record(k, record, args.json, out)
        for e in result.errors:
            print(f"{path}: {e}", file=sys.stderr)
            exit_code = EXIT_DECODE_ERROR

        if args.csv:
            df = parser.to_dataframe(result.records)
            df['source_file'] = path
            frames.append(df)

    if args.csv:
        combined = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()
        combined.to_csv(args.csv, index=False)
        logger.info(f"Transactions written to {args.csv}", tx_count=len(combined))

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
