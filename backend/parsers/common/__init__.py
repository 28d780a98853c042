"""파서 공통 유틸리티"""
from parsers.common.text_utils import (
    WATERMARK_RE,
    clean_text,
    compact,
    parse_amount,
    normalize_amount,
    format_currency,
    parse_date_iso,
    normalize_date,
    extract_receipt_number,
    parse_id_fragment,
    to_dict,
)
from parsers.common.cancellation import CancellationDetector
from parsers.common.json_recovery import recover_json, recover_registry_payload
