"""
참조 규격 카탈로그 테스트
"""

from normlab.models.norms import NumberField, SelectField
from normlab.services.norm_fields.reference import (
    REFERENCE_NORMS,
    build_catalog,
    get_catalog,
    get_reference_norm,
    list_reference_norms,
)
from normlab.services.norm_fields.scope import find_quantity_field


class TestCatalog:
    """카탈로그 로드/캐시 테스트"""

    def test_all_payloads_load(self):
        catalog = build_catalog()
        assert list(catalog) == [p["id"] for p in REFERENCE_NORMS]

    def test_cached(self):
        assert get_catalog() is get_catalog()

    def test_force_rebuild(self):
        first = get_catalog()
        rebuilt = get_catalog(force_rebuild=True)
        assert rebuilt is not first
        assert list(rebuilt) == list(first)

    def test_unknown_id(self):
        assert get_reference_norm("norma_inexistente") is None

    def test_list_order(self):
        assert [n.id for n in list_reference_norms()][0] == "norma_nmx_c414"


class TestReferenceNorms:
    """개별 참조 규격 내용 테스트"""

    def test_c414_limits(self):
        schema = get_reference_norm("norma_nmx_c414")
        f1, f2 = schema.fields
        assert isinstance(f1, NumberField)
        assert (f1.min_limit, f1.max_limit) == (200, None)
        assert (f2.min_limit, f2.max_limit) == (8, 12)
        assert f1.scope is None

    def test_c083_quantity_field(self, c083_schema):
        qty = find_quantity_field(c083_schema)
        assert qty.id == "f_c083_qty"
        assert qty.scope == "global"
        assert (qty.min_limit, qty.max_limit) == (1, 6)

    def test_aci_quantity_by_name(self, aci_schema):
        assert find_quantity_field(aci_schema).name == "Cantidad de Cilindros"

    def test_select_options_carried(self, c083_schema):
        age = c083_schema.field("f_c083_age")
        assert isinstance(age, SelectField)
        assert age.options[-1] == "56 días"

    def test_specimen_fields_are_scoped(self, c083_schema):
        scopes = {f.id: f.scope for f in c083_schema.fields}
        assert scopes.pop("f_c083_qty") == "global"
        assert set(scopes.values()) == {"specimen"}
