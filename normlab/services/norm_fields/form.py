"""규격 스키마 기반 입력 폼 기술자(descriptor)

화면 렌더링 계층이 필드별 입력 컨트롤을 그릴 수 있도록
스키마 + 현재 결과로부터 컨트롤 목록을 만듭니다.
레이아웃/스타일은 렌더링 계층의 몫입니다.
"""
from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from normlab.models.norms import NormSchema, NumberField, SelectField
from normlab.models.results import StructuredResults
from normlab.services.norm_fields.encoder import specimen_key
from normlab.services.norm_fields.scope import effective_specimen_count, partition_fields
from normlab.services.norm_fields.verdict import check_limits, compute_verdict

Widget = Literal['number_input', 'text_input', 'select', 'pass_fail']

_WIDGETS = {
    'number': 'number_input',
    'text': 'text_input',
    'select': 'select',
    'boolean': 'pass_fail',
}


class FormControl(BaseModel):
    """입력 컨트롤 하나"""
    key: str = Field(..., description="평면 맵 키 (fieldId 또는 fieldId_<n>)")
    field_id: str
    specimen_index: Optional[int] = None
    label: str
    widget: Widget
    required: bool = False
    unit_label: Optional[str] = Field(default=None, description="'[단위]' 표시")
    options: List[str] = Field(default_factory=list)
    placeholder: str = ''
    hint: Optional[str] = Field(default=None, description="허용 범위 안내")
    value: Any = None
    invalid: bool = Field(default=False, description="한계값 밖 여부 (강조 표시)")


class SpecimenSection(BaseModel):
    """시편 하나의 컨트롤 묶음"""
    index: int
    title: str
    controls: List[FormControl] = Field(default_factory=list)


class FormLayout(BaseModel):
    """결과 입력 폼 전체"""
    norm_code: str = ''
    global_controls: List[FormControl] = Field(default_factory=list)
    specimen_sections: List[SpecimenSection] = Field(default_factory=list)
    verdict: str


def format_limit(value: Optional[float], fallback: str) -> str:
    """한계값 표시 (정수면 소수점 없이)"""
    if value is None:
        return fallback
    return str(int(value)) if float(value).is_integer() else str(value)


def build_control(norm_field, value: Any, specimen_index: Optional[int] = None) -> FormControl:
    """필드 하나의 입력 컨트롤 생성"""
    if specimen_index is None:
        key = norm_field.id
        label = norm_field.name
    else:
        key = specimen_key(norm_field.id, specimen_index)
        label = f"{norm_field.name} #{specimen_index + 1}"

    control = FormControl(
        key=key,
        field_id=norm_field.id,
        specimen_index=specimen_index,
        label=label,
        widget=_WIDGETS[norm_field.data_type],
        required=norm_field.required,
        value=value,
    )

    if isinstance(norm_field, SelectField):
        control.options = list(norm_field.options)
    elif isinstance(norm_field, NumberField):
        if norm_field.unit:
            control.unit_label = f"[{norm_field.unit}]"
        if norm_field.has_limits:
            control.placeholder = (
                f"Rango: {format_limit(norm_field.min_limit, 'min')} - "
                f"{format_limit(norm_field.max_limit, 'max')}"
            )
            control.hint = (
                f"Permitido: {format_limit(norm_field.min_limit, '-∞')} a "
                f"{format_limit(norm_field.max_limit, '+∞')}"
            )
        control.invalid = check_limits(norm_field, value).is_out_of_range

    return control


def build_form(schema: NormSchema, results: StructuredResults) -> FormLayout:
    """스키마와 현재 결과로 입력 폼 기술자 생성

    Args:
        schema: 규격 스키마
        results: 구조화된 결과

    Returns:
        FormLayout (전역 컨트롤, 시편별 섹션, 현재 판정)
    """
    global_fields, specimen_fields = partition_fields(schema, results.multi_mode)

    layout = FormLayout(
        norm_code=schema.code,
        global_controls=[build_control(f, results.global_values.get(f.id)) for f in global_fields],
        verdict=compute_verdict(schema, results).value,
    )

    if specimen_fields:
        for i in range(effective_specimen_count(schema, results)):
            row = results.specimen_rows[i] if i < results.specimen_count else {}
            layout.specimen_sections.append(SpecimenSection(
                index=i,
                title=f"Espécimen #{i + 1}",
                controls=[build_control(f, row.get(f.id), specimen_index=i) for f in specimen_fields],
            ))

    return layout


__all__ = [
    'Widget',
    'FormControl',
    'SpecimenSection',
    'FormLayout',
    'format_limit',
    'build_control',
    'build_form',
]
