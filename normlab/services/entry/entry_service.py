"""결과 입력 서비스 - 저장소와 규격 필드 엔진을 연결하는 오케스트레이션

흐름: 시료/규격 로드 → 디코딩 → (화면에서 편집) → 판정 → 인코딩 → 저장
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from normlab.errors import MalformedFlatKey
from normlab.models.norms import NormSchema
from normlab.models.results import StructuredResults
from normlab.services.entry.store import BaseResultStore, SampleRecord
from normlab.services.norm_fields.decoder import decode_results
from normlab.services.norm_fields.encoder import encode
from normlab.services.norm_fields.form import FormLayout, build_form
from normlab.services.norm_fields.verdict import Evaluation, Verdict, evaluate

logger = logging.getLogger(__name__)


@dataclass
class ResultEntry:
    """시료 하나의 결과 입력 세션"""

    sample_id: str
    schema: NormSchema
    results: StructuredResults
    warnings: List[MalformedFlatKey] = field(default_factory=list)

    def with_results(self, results: StructuredResults) -> 'ResultEntry':
        """결과만 바꾼 새 세션"""
        return replace(self, results=results)


@dataclass
class SubmitResult:
    """저장 결과"""

    flat: Dict[str, Any]
    verdict: Verdict
    sample: SampleRecord


class ResultEntryService:
    """결과 입력 서비스 - 저장소와 판정 엔진을 통합 관리"""

    def __init__(self, store: BaseResultStore):
        """ResultEntryService 초기화

        Args:
            store: 결과 저장소 인스턴스
        """
        self.store = store

    def open_entry(self, sample_id: str) -> ResultEntry:
        """시료의 저장된 결과를 불러와 입력 세션 생성

        Args:
            sample_id: 시료 id

        Returns:
            ResultEntry (디코딩 경고 포함)

        Raises:
            SampleNotFound, NormNotFound: 저장소에 없음
        """
        sample = self.store.get_sample(sample_id)
        schema = self.store.get_norm(sample.norm_id)
        decoded = decode_results(schema, sample.results)

        if decoded.has_warnings:
            logger.warning(
                f"시료 {sample_id}: 결과 키 {len(decoded.warnings)}개를 무시했습니다"
            )
        logger.info(
            f"결과 입력 시작: sample={sample_id}, norm={schema.code or schema.id}, "
            f"시편 {decoded.results.specimen_count}행"
        )
        return ResultEntry(
            sample_id=sample_id,
            schema=schema,
            results=decoded.results,
            warnings=decoded.warnings,
        )

    def evaluate_entry(self, entry: ResultEntry) -> Evaluation:
        """현재 입력 상태의 판정"""
        return evaluate(entry.schema, entry.results)

    def render_form(self, entry: ResultEntry) -> FormLayout:
        """현재 입력 상태의 폼 기술자"""
        return build_form(entry.schema, entry.results)

    def submit(self, entry: ResultEntry) -> SubmitResult:
        """판정 후 평면 맵으로 인코딩하여 저장

        en_proceso 판정도 저장합니다 (입력 중 상태 보존).
        저장 차단 여부는 호출자가 evaluate_entry()의 missing_keys로 결정합니다.

        Args:
            entry: 입력 세션

        Returns:
            SubmitResult (저장된 평면 맵, 판정, 갱신된 시료)
        """
        evaluation = self.evaluate_entry(entry)
        flat = encode(entry.schema, entry.results)
        sample = self.store.save_results(entry.sample_id, flat, evaluation.verdict)

        logger.info(
            f"결과 저장: action=update, entity=ensayo, sample={entry.sample_id}, "
            f"verdict={evaluation.verdict.value}"
        )
        return SubmitResult(flat=flat, verdict=evaluation.verdict, sample=sample)
