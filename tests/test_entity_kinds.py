import pytest

from entity_autocomplete.kinds import EntityKind, parse_entity_kind
from entity_autocomplete.models import IndexedEntity, SuggestionRequest


def test_parse_entity_kind_accepts_members_values_and_names():
    assert parse_entity_kind(EntityKind.POD) is EntityKind.POD
    assert parse_entity_kind("service") is EntityKind.SERVICE
    assert parse_entity_kind("NAMESPACE") is EntityKind.NAMESPACE
    assert parse_entity_kind(" pod ") is EntityKind.POD


def test_parse_entity_kind_maps_unrecognised_values_to_unknown():
    assert parse_entity_kind("cronjob") is EntityKind.UNKNOWN
    assert parse_entity_kind(None) is EntityKind.UNKNOWN


def test_parse_entity_kind_strict_rejects_unrecognised_values():
    with pytest.raises(ValueError, match="cronjob"):
        parse_entity_kind("cronjob", strict=True)


def test_suggestion_request_normalises_kinds_and_org_id():
    request = SuggestionRequest(
        input="test",
        org_id=123,
        allowed_kinds=["service", EntityKind.POD, "service"],
        allowed_args=None,
    )
    assert request.org_id == "123"
    assert request.allowed_kinds == frozenset({EntityKind.SERVICE, EntityKind.POD})
    assert request.allowed_args == frozenset()


def test_indexed_entity_document_round_trip_keeps_index_field_names():
    entity = IndexedEntity(
        org_id="org-1",
        uid="pod1",
        name="test-Pod",
        ns="anotherNS",
        kind=EntityKind.POD,
        time_started_ns=1,
        related_entity_names=["anotherNS/testService"],
    )
    document = entity.to_document()
    assert document["orgID"] == "org-1"
    assert document["ns"] == "anotherNS"
    assert document["kind"] == "pod"
    assert document["timeStartedNS"] == 1
    assert document["timeStoppedNS"] == 0
    assert document["relatedEntityNames"] == ["anotherNS/testService"]
    assert IndexedEntity.from_source(document) == entity
    assert entity.rendered_name == "anotherNS/test-Pod"
