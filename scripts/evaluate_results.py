#!/usr/bin/env python
"""
규격 결과 판정 점검 스크립트
- 규격 JSON과 (선택) 저장된 평면 결과 JSON을 읽어 디코딩 결과와 판정을 출력합니다.
사용법:
  python scripts/evaluate_results.py norm.json results.json
  python scripts/evaluate_results.py norma_nmx_c083 results.json   # 참조 카탈로그 id
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from normlab.errors import InvalidSchema
from normlab.models.norms import NormSchema, load_norm_schema
from normlab.services.norm_fields.decoder import decode_results
from normlab.services.norm_fields.reference import get_reference_norm
from normlab.services.norm_fields.verdict import evaluate
from normlab.settings import settings
from normlab.utils.log_config import setup_logging


def _load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_schema(arg: str) -> NormSchema:
    if not Path(arg).exists():
        schema = get_reference_norm(arg)
        if schema is not None:
            return schema
    return load_norm_schema(_load_json(arg))


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("사용법: evaluate_results.py <norm.json|catalog id> [results.json]")
        return 1

    setup_logging(level=settings.log_level)

    try:
        schema = _load_schema(args[0])
        flat = _load_json(args[1]) if len(args) > 1 else {}
    except (InvalidSchema, OSError, ValueError) as e:
        print(f"ERROR: {e}")
        return 2

    if not isinstance(flat, dict):
        print(f"ERROR: 결과 JSON은 객체여야 합니다: {args[1]}")
        return 2

    decoded = decode_results(schema, flat)
    evaluation = evaluate(schema, decoded.results)

    report = {
        "norm": schema.code or schema.id,
        "structured": decoded.results.to_dict(),
        "warnings": [w.to_dict() for w in decoded.warnings],
        **evaluation.to_dict(),
    }
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
