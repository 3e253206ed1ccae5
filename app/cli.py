import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from attendance.config import get_settings
from attendance.logger import set_level
from attendance.parser import parse_attendance_file
from attendance.records import build_bulk_import_records

SUPPORTED_SUFFIXES = {".xlsx", ".xlsm", ".xls", ".csv"}


def collect_source_paths(inputs: List[str]) -> List[str]:
    collected: List[str] = []
    for raw in inputs:
        path = Path(raw).expanduser()
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix.lower() in SUPPORTED_SUFFIXES:
                    collected.append(str(child))
        elif path.is_file():
            collected.append(str(path))
        else:
            print(f"[warn] input not found: {raw}")
    return collected


def process_files(
    file_paths: List[str],
    manual_year: Optional[int] = None,
    include_records: bool = False,
) -> Dict[str, Any]:
    files: List[Dict[str, Any]] = []
    for file_path in file_paths:
        result = parse_attendance_file(file_path, manual_year=manual_year)
        entry: Dict[str, Any] = {"file": file_path, "result": result.model_dump(mode="json")}
        if include_records:
            entry["records"] = [r.model_dump(mode="json") for r in build_bulk_import_records(result)]
        files.append(entry)
    return {"files": files, "ok": all(not f["result"]["errors"] for f in files)}


def write_json_output(result: Dict[str, Any], output_dir: str, output_filename: Optional[str] = None) -> str:
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / (output_filename or "attendance.json")
    out_path.write_text(json.dumps(result, ensure_ascii=False, indent=2), encoding="utf-8")
    return str(out_path)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Parse attendance exports into normalised employee/date/status records."
    )
    parser.add_argument(
        "--inputs",
        nargs="+",
        required=True,
        help="Input file paths or directories.",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=settings.ATTENDANCE_MANUAL_YEAR,
        help="Force this year instead of the sheet's Time Period (env ATTENDANCE_MANUAL_YEAR).",
    )
    parser.add_argument(
        "--output-dir",
        default=settings.ATTENDANCE_OUTPUT_DIR,
        help="Directory to write the output JSON (env ATTENDANCE_OUTPUT_DIR).",
    )
    parser.add_argument(
        "--output-json-name",
        default=None,
        help="Output JSON filename (default: attendance.json).",
    )
    parser.add_argument(
        "--output-json-timestamp",
        action="store_true",
        help="Append timestamp to JSON output filename (overrides default name).",
    )
    parser.add_argument(
        "--records",
        action="store_true",
        help="Also emit flattened employee/date/status rows for bulk import.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    set_level(get_settings().ATTENDANCE_LOG_LEVEL)

    file_paths = collect_source_paths(args.inputs)
    if not file_paths:
        print("[error] no valid input files found.")
        return 1

    result = process_files(file_paths, manual_year=args.year, include_records=args.records)

    output_json_name = args.output_json_name
    if args.output_json_timestamp and not output_json_name:
        output_json_name = f"attendance_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

    json_path = write_json_output(result, args.output_dir, output_filename=output_json_name)
    print("JSON:", json_path)
    for entry in result["files"]:
        errors = entry["result"]["errors"]
        status = "error" if errors else "ok"
        print(f"{entry['file']}: {status}, {len(entry['result']['employees'])} employees")
        for err in errors:
            print(f"  [error] {err}")
    return 0 if result["ok"] else 2


if __name__ == "__main__":
    raise SystemExit(main())
