"""
결과 입력 서비스 / 저장소 / 호환성 테스트
"""

import logging

import pytest

from normlab.errors import NormNotFound, SampleNotFound
from normlab.models.norms import load_norm_schema
from normlab.services.entry import (
    InMemoryResultStore,
    ResultEntryService,
    compatible_norms,
    is_compatible,
    load_sample_record,
)
from normlab.services.norm_fields.reference import list_reference_norms
from normlab.services.norm_fields.specimens import (
    add_specimen,
    apply_to_all_specimens,
    set_global_field,
    set_specimen_field,
)
from normlab.services.norm_fields.verdict import Verdict


@pytest.fixture
def service(memory_store):
    return ResultEntryService(memory_store)


class TestSampleRecord:
    """시료 레코드 로드 테스트"""

    def test_legacy_keys(self):
        record = load_sample_record({
            "id": "m9",
            "codigo": "M-009",
            "normaId": "norma_nmx_c083",
            "tipoMaterial": "Concreto",
            "resultados": {"f_c083_qty": 1},
            "estado": "aprobado",
        })
        assert record.code == "M-009"
        assert record.norm_id == "norma_nmx_c083"
        assert record.material_category == "Concreto"
        assert record.results == {"f_c083_qty": 1}
        assert record.status == "aprobado"

    def test_missing_results_become_empty(self):
        record = load_sample_record({"id": "m9", "normaId": "n", "resultados": None})
        assert record.results == {}
        assert record.status == "pendiente"


class TestInMemoryResultStore:
    """메모리 저장소 테스트"""

    def test_unknown_sample(self, memory_store):
        with pytest.raises(SampleNotFound):
            memory_store.get_sample("nope")

    def test_unknown_norm(self, memory_store):
        with pytest.raises(NormNotFound):
            memory_store.get_norm("nope")

    def test_not_found_is_key_error(self, memory_store):
        with pytest.raises(KeyError):
            memory_store.get_sample("nope")

    def test_get_sample_returns_copy(self, memory_store):
        sample = memory_store.get_sample("m1")
        sample.results["f1"] = 1
        assert memory_store.get_sample("m1").results == {"f1": 210}

    def test_save_results(self, memory_store):
        saved = memory_store.save_results("m1", {"f1": 210, "f2": 10}, Verdict.APROBADO)
        assert saved.status == "aprobado"
        assert memory_store.get_sample("m1").results == {"f1": 210, "f2": 10}

    def test_list_norms(self, memory_store):
        assert len(memory_store.list_norms()) == len(list_reference_norms())


class TestResultEntryService:
    """결과 입력 흐름 테스트"""

    def test_open_entry(self, service):
        entry = service.open_entry("m1")
        assert entry.schema.id == "norma_nmx_c414"
        assert entry.results.global_values == {"f1": 210}
        assert entry.warnings == []

    def test_open_entry_without_results(self, service):
        entry = service.open_entry("m2")
        assert entry.results.global_values == {}
        assert entry.results.specimen_rows == []

    def test_evaluate_in_progress(self, service):
        entry = service.open_entry("m1")
        evaluation = service.evaluate_entry(entry)
        assert evaluation.verdict == Verdict.EN_PROCESO
        assert evaluation.missing_keys == ["f2"]

    def test_submit_persists_results_and_status(self, service, memory_store):
        entry = service.open_entry("m1")
        entry = entry.with_results(set_global_field(entry.results, "f2", 10))
        submitted = service.submit(entry)

        assert submitted.verdict == Verdict.APROBADO
        assert submitted.flat == {"f1": 210, "f2": 10}
        stored = memory_store.get_sample("m1")
        assert stored.status == "aprobado"
        assert stored.results == {"f1": 210, "f2": 10}

    def test_submit_specimen_norm(self, service, memory_store):
        entry = service.open_entry("m2")
        r = set_global_field(entry.results, "f_aci_qty", 2)
        for i, fc in enumerate([25, 18]):
            r = set_specimen_field(r, i, "f_aci_fc", fc)
        r = apply_to_all_specimens(r, "f_aci_age", "28 días")
        r = apply_to_all_specimens(r, "f_aci_method", "Valor Individual")
        r = apply_to_all_specimens(r, "f_aci_pass", True)
        submitted = service.submit(entry.with_results(r))

        assert submitted.verdict == Verdict.RECHAZADO
        assert submitted.flat["f_aci_qty"] == 2
        assert submitted.flat["f_aci_fc_1"] == 18
        assert memory_store.get_sample("m2").status == "rechazado"

        reopened = service.open_entry("m2")
        assert reopened.results.specimen_count == 2
        assert reopened.results.global_values == {"f_aci_qty": 2}

    def test_submit_in_progress_is_saved(self, service, memory_store):
        entry = service.open_entry("m2")
        entry = entry.with_results(add_specimen(entry.results))
        submitted = service.submit(entry)
        assert submitted.verdict == Verdict.EN_PROCESO
        assert memory_store.get_sample("m2").status == "en_proceso"

    def test_declared_quantity_survives_reopen(self, service, memory_store):
        """선언된 시편 수가 저장 후 다시 열어도 유지되어 판정이 같음"""
        memory_store.add_sample({"id": "m5", "normaId": "norma_nmx_c083", "resultados": {}})
        entry = service.open_entry("m5")
        r = set_global_field(entry.results, "f_c083_qty", 3)
        for field_id, value in [
            ("f_c083_age", "28 días"),
            ("f_c083_1", 15.0),
            ("f_c083_2", 30.0),
            ("f_c083_3", 45000),
            ("f_c083_4", 254.6),
        ]:
            r = set_specimen_field(r, 0, field_id, value)
        entry = entry.with_results(r)
        before = service.evaluate_entry(entry).verdict

        submitted = service.submit(entry)
        reopened = service.open_entry("m5")

        assert before == Verdict.EN_PROCESO
        assert submitted.flat["f_c083_qty"] == 3
        assert memory_store.get_sample("m5").status == "en_proceso"
        assert service.evaluate_entry(reopened).verdict == before

    def test_submit_logs_update(self, service, caplog):
        entry = service.open_entry("m1")
        with caplog.at_level(logging.INFO, logger="normlab"):
            service.submit(entry)
        assert "action=update, entity=ensayo" in caplog.text

    def test_render_form(self, service):
        layout = service.render_form(service.open_entry("m1"))
        assert layout.verdict == "en_proceso"
        assert [c.key for c in layout.global_controls] == ["f1", "f2"]

    def test_decode_warnings_are_reported(self, memory_store, caplog):
        memory_store.add_sample({
            "id": "m3",
            "normaId": "norma_nmx_c414",
            "resultados": {"f1": 210, "f1_x": 3},
        })
        service = ResultEntryService(memory_store)
        with caplog.at_level(logging.WARNING, logger="normlab"):
            entry = service.open_entry("m3")
        assert [w.key for w in entry.warnings] == ["f1_x"]
        assert "m3" in caplog.text

    def test_unknown_sample(self, service):
        with pytest.raises(SampleNotFound):
            service.open_entry("nope")

    def test_sample_with_unknown_norm(self, memory_store):
        memory_store.add_sample({"id": "m4", "normaId": "norma_inexistente"})
        with pytest.raises(NormNotFound):
            ResultEntryService(memory_store).open_entry("m4")


class TestCompatibility:
    """시료 분류별 규격 필터 테스트"""

    def test_concrete(self):
        norms = list_reference_norms()
        assert len(compatible_norms(norms, "Concreto")) == 5

    def test_soil_has_none(self):
        assert compatible_norms(list_reference_norms(), "Suelo") == []

    def test_no_category(self):
        norm = list_reference_norms()[0]
        assert is_compatible(norm, None) is False
        assert compatible_norms(list_reference_norms(), "") == []

    def test_inactive_excluded_by_default(self):
        inactive = load_norm_schema({
            "id": "norma_old",
            "activa": False,
            "tiposMuestraCompatibles": ["Concreto"],
            "campos": [],
        })
        norms = list_reference_norms() + [inactive]
        assert inactive not in compatible_norms(norms, "Concreto")
        assert inactive in compatible_norms(norms, "Concreto", include_inactive=True)
