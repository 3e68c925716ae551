"""결과 저장소 인터페이스

규격(NormSchema)과 시료 결과(평면 맵)를 제공하고 저장하는 외부 데이터 저장소의
인터페이스. 실제 저장소(호스팅 DB 등)는 이 클래스를 상속하여 구현합니다.
InMemoryResultStore는 테스트/스크립트용 구현체입니다.
"""
from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

from normlab.errors import NormNotFound, SampleNotFound
from normlab.models.norms import NormSchema, load_norm_schema
from normlab.services.norm_fields.verdict import Verdict

logger = logging.getLogger(__name__)

SampleStatus = Literal['pendiente', 'en_proceso', 'aprobado', 'rechazado']


class SampleRecord(BaseModel):
    """시료 레코드 (결과 입력에 필요한 부분만)"""
    id: str
    code: str = ''
    norm_id: str
    material_category: Optional[str] = Field(default=None, description="Concreto, Suelo, Acero ...")
    results: Dict[str, Any] = Field(default_factory=dict, description="저장된 평면 결과 맵")
    status: SampleStatus = 'pendiente'


_SAMPLE_KEY_MAP = {
    'codigo': 'code',
    'normaId': 'norm_id',
    'tipoMaterial': 'material_category',
    'resultados': 'results',
    'estado': 'status',
}


def load_sample_record(payload: Union[SampleRecord, Mapping[str, Any]]) -> SampleRecord:
    """저장된 시료 페이로드(원본 키 포함)를 SampleRecord로 변환"""
    if isinstance(payload, SampleRecord):
        return payload
    data = {_SAMPLE_KEY_MAP.get(k, k): v for k, v in payload.items()}
    if data.get('results') is None:
        data['results'] = {}
    return SampleRecord.model_validate(data)


class BaseResultStore(ABC):
    """결과 저장소 기본 추상 클래스

    필수 구현:
        - get_norm(norm_id): 규격 조회
        - get_sample(sample_id): 시료 조회
        - save_results(sample_id, flat, verdict): 평면 결과 + 판정 저장
        - list_norms(): 규격 목록
    """

    @abstractmethod
    def get_norm(self, norm_id: str) -> NormSchema:
        """규격 조회

        Raises:
            NormNotFound: 규격이 없음
        """

    @abstractmethod
    def get_sample(self, sample_id: str) -> SampleRecord:
        """시료 조회

        Raises:
            SampleNotFound: 시료가 없음
        """

    @abstractmethod
    def save_results(self, sample_id: str, flat: Dict[str, Any], verdict: Verdict) -> SampleRecord:
        """평면 결과와 판정을 저장하고 갱신된 시료 반환"""

    @abstractmethod
    def list_norms(self) -> List[NormSchema]:
        """저장된 규격 목록"""


class InMemoryResultStore(BaseResultStore):
    """테스트용 메모리 저장소"""

    def __init__(
        self,
        norms: Optional[Iterable[Union[NormSchema, Mapping[str, Any]]]] = None,
        samples: Optional[Iterable[Union[SampleRecord, Mapping[str, Any]]]] = None,
    ):
        """InMemoryResultStore 초기화

        Args:
            norms: 규격 (NormSchema 또는 페이로드)
            samples: 시료 (SampleRecord 또는 페이로드)
        """
        self._norms: Dict[str, NormSchema] = {}
        self._samples: Dict[str, SampleRecord] = {}
        for n in norms or []:
            self.add_norm(n)
        for s in samples or []:
            self.add_sample(s)

    def add_norm(self, norm: Union[NormSchema, Mapping[str, Any]]) -> NormSchema:
        schema = load_norm_schema(norm)
        self._norms[schema.id] = schema
        return schema

    def add_sample(self, sample: Union[SampleRecord, Mapping[str, Any]]) -> SampleRecord:
        record = load_sample_record(sample)
        self._samples[record.id] = record
        return record

    def get_norm(self, norm_id: str) -> NormSchema:
        try:
            return self._norms[norm_id]
        except KeyError:
            raise NormNotFound(norm_id) from None

    def get_sample(self, sample_id: str) -> SampleRecord:
        try:
            return self._samples[sample_id].model_copy(deep=True)
        except KeyError:
            raise SampleNotFound(sample_id) from None

    def save_results(self, sample_id: str, flat: Dict[str, Any], verdict: Verdict) -> SampleRecord:
        current = self.get_sample(sample_id)
        updated = current.model_copy(
            update={'results': copy.deepcopy(flat), 'status': verdict.value}
        )
        self._samples[sample_id] = updated
        logger.debug(f"결과 저장: sample={sample_id}, 키 {len(flat)}개, status={verdict.value}")
        return updated.model_copy(deep=True)

    def list_norms(self) -> List[NormSchema]:
        return list(self._norms.values())


__all__ = [
    'SampleStatus',
    'SampleRecord',
    'load_sample_record',
    'BaseResultStore',
    'InMemoryResultStore',
]
