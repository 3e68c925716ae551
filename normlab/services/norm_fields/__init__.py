"""규격 필드 엔진 패키지

시험 규격(Norm)을 타입이 지정된 필드 스키마로 다루고, 시편 행을 포함한 결과를
저장용 평면 맵과 구조화된 형태 사이에서 변환하며, 판정을 계산합니다.

주요 모듈:
- scope: 필드 범위 해석 (effective_scope), 수량 필드 탐지
- decoder: 평면 결과 맵 → 구조화된 결과
- encoder: 구조화된 결과 → 평면 결과 맵
- verdict: 판정 (en_proceso | aprobado | rechazado)
- specimens: 시편 행 추가/삭제/일괄 적용
- form: 입력 폼 기술자
- reference/: 참조 규격 카탈로그
"""

from .scope import (
    effective_scope,
    effective_specimen_count,
    find_quantity_field,
    is_quantity_field,
    partition_fields,
)

from .decoder import DecodeResult, decode, decode_results

from .encoder import encode, specimen_key

from .verdict import (
    CellAssessment,
    CellStatus,
    Evaluation,
    Verdict,
    check_limits,
    compute_verdict,
    evaluate,
)

from .specimens import (
    add_specimen,
    apply_to_all_specimens,
    remove_specimen,
    set_global_field,
    set_multi_mode,
    set_specimen_field,
)

from .form import FormControl, FormLayout, SpecimenSection, build_form

__all__ = [
    # scope
    "effective_scope",
    "effective_specimen_count",
    "find_quantity_field",
    "is_quantity_field",
    "partition_fields",
    # decoder
    "DecodeResult",
    "decode",
    "decode_results",
    # encoder
    "encode",
    "specimen_key",
    # verdict
    "CellAssessment",
    "CellStatus",
    "Evaluation",
    "Verdict",
    "check_limits",
    "compute_verdict",
    "evaluate",
    # specimens
    "add_specimen",
    "apply_to_all_specimens",
    "remove_specimen",
    "set_global_field",
    "set_multi_mode",
    "set_specimen_field",
    # form
    "FormControl",
    "FormLayout",
    "SpecimenSection",
    "build_form",
]
