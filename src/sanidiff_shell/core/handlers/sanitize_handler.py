# ============================================
# file: src/sanidiff_shell/core/handlers/sanitize_handler.py
# ============================================
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

from sanitizer.controllers.batch_controller import BatchSanitizeController
from sanitizer.controllers.sanitize_controller import sanitize
from sanitizer.exceptions import SanitizerError
from sanitizer.model import RunOptions
from sanidiff_shell.core.managers.config_manager import config_manager
from sanidiff_shell.core.utils.path_utils import PathUtils
from sanidiff_shell.core.utils.rules_loader import load_rules

logger = logging.getLogger(__name__)

sanitize_help_text = """
  sanitize [FILES...] --rules RULES.json [--path P] [--output a,b] [--out-dir DIR] [--workers N]
      Normalizes HTML documents with a sanitization rule set.
      Without files, one document is read from stdin and printed.
""".strip()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sanitize", description="Normalize HTML documents for diffing.")
    parser.add_argument("files", metavar="FILE", nargs="*", help="HTML files to sanitize (default: stdin).")
    parser.add_argument("--rules", required=True, help="JSON file with the sanitization rules.")
    parser.add_argument("--path", default=None, help="Document path matched against rule 'path' patterns.")
    parser.add_argument("--output", default=None, help="Comma-separated region names, in output order.")
    parser.add_argument("--out-dir", default=None, help="Directory to write sanitized files into.")
    parser.add_argument("--workers", type=int, default=None,
                        help="Number of parallel processes (default: sanitizer.workers setting).")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    return parser


def handle_sanitize(args: List[str], _stdin: Optional[Union[str, bytes]] = None) -> int:
    parser = _build_parser()
    try:
        pargs = parser.parse_args(args)
    except SystemExit:
        return 1

    try:
        rules = load_rules(pargs.rules)
    except SanitizerError as e:
        print(f"❌ Error: {e}")
        return 1

    output = [n.strip() for n in pargs.output.split(",") if n.strip()] if pargs.output else None
    options = RunOptions(path=pargs.path, output=output)

    if not pargs.files:
        # Raw bytes; invalid sequences are dropped by the encoding repair
        html = _stdin if _stdin is not None else sys.stdin.buffer.read()
        try:
            sys.stdout.write(sanitize(html, rules, options))
        except SanitizerError as e:
            logger.error("Sanitize failed: %s", e, exc_info=True)
            print(f"❌ Sanitize error: {e}")
            return 1
        return 0

    documents: Dict[str, bytes] = {}
    for name in pargs.files:
        path = Path(name)
        if not path.is_file():
            print(f"❌ Error: File not found: {path}")
            return 1
        documents[name] = path.read_bytes()

    workers = pargs.workers or config_manager.get_nested("sanitizer.workers", 1)
    show_progress = not pargs.no_progress and bool(config_manager.get_nested("sanitizer.show_progress", True))

    controller = BatchSanitizeController(default_workers=workers)
    result = controller.sanitize_documents(documents, rules, options, workers=workers, show_progress=show_progress)

    collisions = 0
    for name, error in result.errors.items():
        print(f"❌ {name}: {error}")

    if pargs.out_dir:
        suffix = config_manager.get_nested("sanitizer.suffix", ".sanitized.html")
        base = PathUtils.get_common_parent([Path(name) for name in documents])
        written: Dict[Path, str] = {}
        for name, text in result.outputs.items():
            target = PathUtils.get_output_path(Path(name), Path(pargs.out_dir), suffix, base=base)
            if target in written:
                print(f"❌ {name}: output {target} already written for {written[target]}")
                collisions += 1
                continue
            target.write_text(text, encoding="utf-8")
            written[target] = name
        print(f"✅ Sanitized {len(written)}/{len(documents)} file(s) into {pargs.out_dir} "
              f"in {result.duration_s}s.")
    elif len(documents) == 1:
        for text in result.outputs.values():
            sys.stdout.write(text)
    else:
        for name in documents:
            if name in result.outputs:
                print(f"==> {name} <==")
                sys.stdout.write(result.outputs[name])

    return 0 if result.ok and not collisions else 1
