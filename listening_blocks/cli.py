from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .audit import AuditFinding
from .config import load_config
from .errors import ConfigError, ExportError
from .export import join_blocks, write_markdown
from .export_excel import export_workbook
from .pipeline import run_pipeline
from .run_log import RunLogger
from .search import filter_blocks
from .status_report import build_status_report, format_status_report


def _add_common_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        "--input",
        help="Path to the pasted text. Reads stdin when omitted.",
    )
    sub.add_argument(
        "--config",
        help="Path to YAML config file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="listening-blocks")

    subparsers = parser.add_subparsers(dest="command", required=True)

    gen = subparsers.add_parser(
        "generate",
        help="Turn pasted post links, captions and dates into search blocks.",
    )
    _add_common_arguments(gen)
    gen.add_argument(
        "--out",
        help="Output directory for the markdown export and run log.",
    )
    gen.add_argument(
        "--search",
        default="",
        help='Only print blocks matching any term (e.g. "909734414525831 OR C_REdQMix6").',
    )
    gen.add_argument(
        "--xlsx",
        action="store_true",
        help="Also write an Excel workbook to --out.",
    )
    gen.set_defaults(_handler=_cmd_generate)

    aud = subparsers.add_parser(
        "audit",
        help="Check that every extracted identifier made it into a block.",
    )
    _add_common_arguments(aud)
    aud.set_defaults(_handler=_cmd_audit)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _read_input(path: str | None) -> str:
    if not path:
        return sys.stdin.read()
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read input file: {p}") from e


def _print_finding(finding: AuditFinding) -> None:
    print(f"{finding.label}: {finding.title_words}".rstrip())
    print(finding.message)
    if finding.original_link:
        print(f"Enlace original: {finding.original_link}")


def _cmd_generate(args: argparse.Namespace) -> int:
    out_dir = Path(args.out) if args.out else None
    log_path = out_dir / "run.log" if out_dir is not None else None

    with RunLogger.open(log_path, overwrite=True) as log:
        log.info(
            "generate_command_started",
            input_path=str(args.input or "<stdin>"),
            out_dir=str(out_dir) if out_dir is not None else None,
        )

        try:
            cfg = load_config(args.config)
            raw_text = _read_input(args.input)

            result = run_pipeline(raw_text, config=cfg, logger=log)
            report = build_status_report(result)

            shown = filter_blocks(result.blocks, args.search)
            if shown:
                print(join_blocks(shown, separator=cfg.blocks.separator))

            message = format_status_report(report)
            if report["status"] != "empty_input":
                _eprint(message)

            if out_dir is not None and result.blocks:
                md_path = out_dir / cfg.export.markdown_filename
                write_markdown(result.blocks, md_path, separator=cfg.blocks.separator)
                log.info("export_markdown_completed", path=str(md_path))

                if bool(getattr(args, "xlsx", False)):
                    xlsx_path = out_dir / cfg.export.workbook_filename
                    export_workbook(cfg, result, xlsx_path)
                    log.info("export_excel_completed", path=str(xlsx_path))

            return 0 if result.blocks else 4
        except Exception as e:
            log.exception("generate_command_failed", exc=e)
            raise


def _cmd_audit(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    raw_text = _read_input(args.input)

    result = run_pipeline(raw_text, config=cfg)
    findings = result.audit()

    for finding in findings:
        _print_finding(finding)

    return 0 if all(f.is_success for f in findings) else 5


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        handler = getattr(args, "_handler")
        return int(handler(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except ExportError as e:
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1
