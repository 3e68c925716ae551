"""시료 분류와 규격 호환성"""

from typing import Iterable, List, Optional

from normlab.models.norms import NormSchema


def is_compatible(norm: NormSchema, category: Optional[str]) -> bool:
    """규격이 시료 분류에 적용 가능한지

    분류가 없으면 어떤 규격과도 호환되지 않습니다.
    """
    if not category:
        return False
    return category in norm.compatible_categories


def compatible_norms(
    norms: Iterable[NormSchema],
    category: Optional[str],
    include_inactive: bool = False,
) -> List[NormSchema]:
    """시료 분류에 적용 가능한 규격 목록 (입력 순서 유지)

    Args:
        norms: 규격 목록
        category: 시료 분류 (Concreto, Suelo, Acero ...)
        include_inactive: 비활성 규격 포함 여부

    Returns:
        호환 규격 리스트
    """
    return [
        n for n in norms
        if is_compatible(n, category) and (include_inactive or n.active)
    ]
