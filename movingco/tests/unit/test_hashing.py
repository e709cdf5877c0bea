from movingco.schemas.service_area import ServiceAreaUpdate
from movingco.utils.hashing import normalize_payload, payload_hash


def test_hash_ignores_key_order():
    assert payload_hash({"a": 1, "b": 2}) == payload_hash({"b": 2, "a": 1})


def test_models_hash_only_fields_that_were_set():
    assert normalize_payload(ServiceAreaUpdate(is_active=True)) == {"is_active": True}
    assert payload_hash(ServiceAreaUpdate(is_active=True)) == payload_hash({"is_active": True})


def test_scalars_and_none():
    assert normalize_payload(None) == {}
    assert normalize_payload(5) == {"value": 5}
