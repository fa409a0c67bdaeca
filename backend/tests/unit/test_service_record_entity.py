"""Unit tests for the ServiceRecord entity: normalisation, validation, lifecycle."""

from datetime import date

import pytest

from oilchange.domain.entities import (
    ITEMIZED_SERVICES,
    NOT_APPLICABLE_NOTE,
    RecordStatus,
    ServiceRecord,
    is_valid_plate,
    normalize_plate,
)
from oilchange.domain.exceptions import InvalidTransitionError, RecordValidationError


def _filled_record(**overrides) -> ServiceRecord:
    values = dict(
        shop_id="shop-1",
        operator_id="op-1",
        plate="AB123CD",
        client_name="Juan Pérez",
        oil_type="Sintético",
        oil_brand="YPF",
        oil_grade="SAE 5W-30",
        oil_quantity="4 Litros",
        current_km=45000,
        service_date=date(2025, 11, 15),
    )
    values.update(overrides)
    record = ServiceRecord(**values)
    record.fill_projections()
    return record


# ── Plates ──


def test_plate_is_normalized_on_construction():
    record = ServiceRecord(shop_id="s", operator_id="o", plate=" ab 123\tcd ")
    assert record.plate == "AB123CD"


@pytest.mark.parametrize("plate", ["AB123CD", "abc123", "AC 001 AA"])
def test_valid_plate_formats(plate):
    assert is_valid_plate(plate)


@pytest.mark.parametrize("plate", ["A123BCD", "AB12CD", "1234567", ""])
def test_invalid_plate_formats(plate):
    assert not is_valid_plate(plate)


def test_normalize_plate_handles_none():
    assert normalize_plate(None) == ""


# ── Itemized services ──


def test_all_services_default_to_not_done_with_sn_note():
    record = ServiceRecord(shop_id="s", operator_id="o", plate="AB123CD")
    assert list(record.services) == list(ITEMIZED_SERVICES)
    assert all(not item.done for item in record.services.values())
    assert all(item.note == NOT_APPLICABLE_NOTE for item in record.services.values())


def test_unchecking_a_service_resets_note():
    record = ServiceRecord(shop_id="s", operator_id="o", plate="AB123CD")
    record.set_service("air_filter", True, "limpio")
    record.set_service("air_filter", False)
    assert record.services["air_filter"].done is False
    assert record.services["air_filter"].note == NOT_APPLICABLE_NOTE


def test_checking_a_service_clears_placeholder_note():
    record = ServiceRecord(shop_id="s", operator_id="o", plate="AB123CD")
    record.set_service("coolant", True)
    assert record.services["coolant"].done is True
    assert record.services["coolant"].note == ""


def test_unknown_service_is_rejected():
    record = ServiceRecord(shop_id="s", operator_id="o", plate="AB123CD")
    with pytest.raises(RecordValidationError) as exc_info:
        record.set_service("turbo", True, "x")
    assert "services.turbo" in exc_info.value.errors


def test_services_from_dicts_are_merged_with_defaults():
    record = ServiceRecord(
        shop_id="s",
        operator_id="o",
        plate="AB123CD",
        services={"oil_filter": {"done": True, "note": "cambiado"}},
    )
    assert record.services["oil_filter"].note == "cambiado"
    assert record.services["gearbox"].note == NOT_APPLICABLE_NOTE


def test_stored_services_tolerate_unknown_names_and_keys():
    record = ServiceRecord(
        shop_id="s",
        operator_id="o",
        plate="AB123CD",
        services={
            "oil_filter": {"done": True, "note": "cambiado", "checked_by": "op-9"},
            "air_filter": {"done": True},
            "turbo": {"done": True, "note": "limpio"},
        },
    )
    assert list(record.services) == list(ITEMIZED_SERVICES)
    assert record.services["oil_filter"].note == "cambiado"
    assert record.services["air_filter"].done is True
    assert record.services["air_filter"].note == ""
    assert "turbo" not in record.services


# ── Edits ──


def test_apply_changes_reprojects_next_date():
    record = _filled_record()
    record.apply_changes({"service_date": date(2025, 12, 1)})
    assert record.next_service_date == date(2026, 3, 1)

    record.apply_changes({"interval_months": 6})
    assert record.next_service_date == date(2026, 6, 1)


def test_apply_changes_keeps_explicit_next_values():
    record = _filled_record()
    record.apply_changes({"current_km": 50000, "next_km": 58000})
    assert record.next_km == 58000


def test_apply_changes_reprojects_odometer():
    record = _filled_record()
    record.apply_changes({"current_km": 60000})
    assert record.next_km == 70000


def test_apply_changes_partial_service_keeps_flag():
    record = _filled_record()
    record.set_service("oil_filter", True, "cambiado")
    record.apply_changes({"services": {"oil_filter": {"note": "Mann W712"}}})
    assert record.services["oil_filter"].done is True
    assert record.services["oil_filter"].note == "Mann W712"


# ── Validation ──


def test_completion_requires_mandatory_fields():
    record = ServiceRecord(shop_id="s", operator_id="o", plate="AB123CD")
    errors = record.completion_errors()
    for field_name in ("client_name", "oil_type", "oil_brand", "oil_grade",
                       "oil_quantity", "current_km", "service_date"):
        assert field_name in errors
    assert "plate" not in errors


def test_completion_requires_note_for_done_service():
    record = _filled_record()
    record.set_service("oil_filter", True)
    assert "services.oil_filter" in record.completion_errors()

    record.set_service("oil_filter", True, "cambiado")
    assert record.completion_errors() == {}


def test_completion_rejects_bad_plate_format():
    record = _filled_record(plate="A1")
    assert record.completion_errors()["plate"] == "invalid plate format"


def test_range_errors_catch_inverted_values():
    record = _filled_record(next_km=40000, next_service_date=date(2025, 1, 1))
    errors = record.range_errors()
    assert "next_km" in errors
    assert "next_service_date" in errors



def test_range_errors_require_a_plate():
    record = _filled_record(plate="  ")
    assert record.range_errors()["plate"] == "plate is required"
    assert "plate" not in _filled_record().range_errors()


# ── Lifecycle ──


def test_complete_then_send():
    record = _filled_record()
    record.complete("op-1")
    assert record.status == RecordStatus.COMPLETE
    assert record.completed_by == "op-1"
    assert record.completed_at is not None

    assert record.mark_sent() is True
    assert record.status == RecordStatus.SENT
    assert record.mark_sent() is False
    assert record.status == RecordStatus.SENT


def test_complete_with_missing_fields_leaves_record_pending():
    record = ServiceRecord(shop_id="s", operator_id="o", plate="AB123CD")
    with pytest.raises(RecordValidationError):
        record.complete("op-1")
    assert record.status == RecordStatus.PENDING
    assert record.completed_at is None


def test_pending_cannot_be_sent():
    record = ServiceRecord(shop_id="s", operator_id="o", plate="AB123CD")
    with pytest.raises(InvalidTransitionError):
        record.mark_sent()


def test_complete_is_not_repeatable():
    record = _filled_record()
    record.complete("op-1")
    with pytest.raises(InvalidTransitionError):
        record.complete("op-1")
