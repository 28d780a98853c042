"""등기부등본 변환 CLI

Usage:
    python tools/cli.py upload/sample.pdf                     # 상세 출력
    python tools/cli.py upload/*.pdf --summary                # 요약
    python tools/cli.py upload/sample.pdf --json              # JSON
    python tools/cli.py upload/sample.pdf --section 을구       # 특정 섹션
    python tools/cli.py upload/sample.pdf --strategy model    # Gemini만 사용
    python tools/cli.py extracted.txt --text                  # 추출된 텍스트 파일
"""
import argparse
import asyncio
import glob
import json
import os
import sys
from pathlib import Path

_BACKEND_ROOT = str(Path(__file__).resolve().parent.parent)
if _BACKEND_ROOT not in sys.path:
    sys.path.insert(0, _BACKEND_ROOT)

from loguru import logger

from application.use_cases.convert_document import ConvertDocumentInput, ConvertDocumentUseCase
from config import settings
from domain.enums import ExtractionStrategy
from parsers.adapter import ParserServiceAdapter
from parsers.common.text_utils import format_currency


def configure_logging(level: str = None, log_file: str = None):
    logger.remove()
    logger.add(sys.stderr, level=level or settings.LOG_LEVEL)
    log_file = log_file or settings.LOG_FILE
    if log_file:
        logger.add(log_file, level="DEBUG", rotation="10 MB", retention="30 days", encoding="utf-8")


def format_entry_a(e: dict) -> str:
    c = " [말소]" if e["status"] == "말소" else ""
    c += " [가등기]" if e.get("provisional") else ""
    ident = f" ({e['idNumber']})" if e.get("idNumber") else ""
    cause = f"\n         원인: {e['registrationCause']}" if e.get("registrationCause") else ""
    return (f"  {e['rank']:>6} | {e['purpose']:<22} "
            f"| {e['receiptDate']:<10} | {e['rightHolder']}{ident}{c}{cause}")


def format_entry_b(e: dict) -> str:
    c = " [말소]" if e["status"] == "말소" else ""
    amt = f" 금{format_currency(e['claimAmount'])}" if e.get("claimAmount", "0") != "0" else ""
    debtor = f"\n         채무자: {e['debtor']}" if e.get("debtor") else ""
    return (f"  {e['rank']:>6} | {e['purpose']:<22} "
            f"| {e['receiptDate']:<10} | {e['rightHolder']}{amt}{c}{debtor}")


def print_header(data: dict):
    h = data["header"]
    print("[표제부]")
    for k, label in [("uniqueNumber", "고유번호"), ("location", "소재지"),
                     ("roadAddress", "도로명주소"), ("buildingName", "건물명"),
                     ("structure", "구조"), ("exclusiveArea", "전유면적"),
                     ("landRightType", "대지권종류"), ("landRightRatio", "대지권비율"),
                     ("declaredOwnerName", "명의인")]:
        if h.get(k):
            print(f"  {label}: {h[k]}")


def print_summary_block(data: dict):
    s = data["summary"]
    print("[요약]")
    since = f" ({s['ownerReceiptDate']} 접수)" if s.get("ownerReceiptDate") else ""
    print(f"  현재 소유자: {s['currentOwner']}{since}")
    print(f"  근저당 {s['mortgageCount']}건 {format_currency(s['totalMortgage']) or '0원'}")
    print(f"  전세권 {s['leaseCount']}건 {format_currency(s['totalLease']) or '0원'}")
    for w in s["warnings"]:
        print(f"  {w}")


def print_detail(data: dict):
    print_header(data)
    s = data["summary"]
    print(f"\n[갑구] 총 {len(data['ownershipEntries'])}건 (유효 {s['activeCountA']}건)")
    for e in data["ownershipEntries"]:
        print(format_entry_a(e))
    print(f"\n[을구] 총 {len(data['encumbranceEntries'])}건 (유효 {s['activeCountB']}건)")
    for e in data["encumbranceEntries"]:
        print(format_entry_b(e))
    print()
    print_summary_block(data)


def print_summary(data: dict, fname: str, strategy: str):
    s = data["summary"]
    addr = data["header"]["location"][:30]
    print(f"  {fname:<35} [{strategy:<5}] {addr:<30} 소유자:{s['currentOwner']} "
          f"갑:{s['activeCountA']}/{len(data['ownershipEntries'])} "
          f"을:{s['activeCountB']}/{len(data['encumbranceEntries'])}")


def print_section(data: dict, section: str):
    s = section.lower()
    if s in ("갑구", "갑", "a", "section_a"):
        print(f"[갑구] 총 {len(data['ownershipEntries'])}건")
        for e in data["ownershipEntries"]:
            print(format_entry_a(e))
    elif s in ("을구", "을", "b", "section_b"):
        print(f"[을구] 총 {len(data['encumbranceEntries'])}건")
        for e in data["encumbranceEntries"]:
            print(format_entry_b(e))
    elif s in ("표제부", "표제", "title", "header"):
        print(json.dumps(data["header"], ensure_ascii=False, indent=2))
    elif s in ("요약", "summary"):
        print_summary_block(data)
    else:
        print(f"알 수 없는 섹션: {section}", file=sys.stderr)
        sys.exit(1)


def build_use_case(strategy: ExtractionStrategy) -> ConvertDocumentUseCase:
    model_service = None
    if strategy != ExtractionStrategy.TEXT and settings.GEMINI_API_KEY:
        from infrastructure.gemini import GeminiClient
        model_service = GeminiClient()
    return ConvertDocumentUseCase(ParserServiceAdapter(), model_service)


def collect_files(patterns, text_mode: bool):
    suffix = ".txt" if text_mode else ".pdf"
    files = []
    for pattern in patterns:
        expanded = glob.glob(pattern)
        files.extend(expanded if expanded else ([pattern] if os.path.isfile(pattern) else []))
    return sorted(f for f in files if f.lower().endswith(suffix))


async def convert_files(files, args):
    strategy = ExtractionStrategy(args.strategy)
    use_case = build_use_case(strategy)
    outputs = []
    for fpath in files:
        fname = os.path.basename(fpath)
        if args.text:
            raw_text = Path(fpath).read_text(encoding="utf-8")
            input = ConvertDocumentInput(file_name=fname, strategy=ExtractionStrategy.TEXT,
                                         document_type=args.type, parser_version=args.parser,
                                         raw_text=raw_text)
        else:
            input = ConvertDocumentInput(file_name=fname, file_content=Path(fpath).read_bytes(),
                                         strategy=strategy, document_type=args.type,
                                         parser_version=args.parser)
        outputs.append((fname, await use_case.execute(input)))
    return outputs


def main(argv=None):
    ap = argparse.ArgumentParser(description="등기부등본 변환 CLI")
    ap.add_argument("files", nargs="+", help="PDF 파일 경로 (--text면 텍스트 파일)")
    ap.add_argument("--json", action="store_true", help="JSON 출력")
    ap.add_argument("--summary", action="store_true", help="요약 출력")
    ap.add_argument("--section", type=str, help="특정 섹션 (표제부/갑구/을구/요약)")
    ap.add_argument("--strategy", "-s", default="auto",
                    choices=[s.value for s in ExtractionStrategy], help="변환 방식")
    ap.add_argument("--text", action="store_true", help="입력을 추출된 텍스트 파일로 취급")
    ap.add_argument("--type", "-t", default="registry", help="문서 타입")
    ap.add_argument("--parser", "-p", default="latest", help="텍스트 파서 버전")
    ap.add_argument("--log-level", default=None, help="로그 레벨")
    args = ap.parse_args(argv)

    configure_logging(args.log_level)

    files = collect_files(args.files, args.text)
    if not files:
        print("변환할 파일이 없습니다.", file=sys.stderr)
        sys.exit(1)

    outputs = asyncio.run(convert_files(files, args))

    results = []
    failed = 0
    for fname, output in outputs:
        if not output.success:
            failed += 1
            print(f"  {fname}: 변환 실패 - {output.error}", file=sys.stderr)
            continue
        strategy = output.strategy_used.value
        if args.json:
            results.append(output.data)
            continue
        if args.summary:
            print_summary(output.data, fname, strategy)
            continue
        if len(files) > 1:
            print(f"\n{'=' * 80}\n  {fname} ({strategy})\n{'=' * 80}")
        if args.section:
            print_section(output.data, args.section)
        else:
            print_detail(output.data)

    if args.json and results:
        output = results if len(results) > 1 else results[0]
        print(json.dumps(output, ensure_ascii=False, indent=2))

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
