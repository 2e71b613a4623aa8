import pytest

from app.core.metadata import InMemoryMetadataRepository, ServiceRole, assemble_roles


def test_assemble_roles():
    roles = assemble_roles({
        "1": {"name": " https://sp.example.org ", "type": "saml20-sp", "metadata": {"name": {"en": "SP"}}},
        "2": {"name": "https://idp.example.org", "type": "saml20-idp", "allow_all_entities": False},
    })
    assert roles[0] == ServiceRole("https://sp.example.org", "saml20-sp")
    assert roles[0].metadata == {"name": {"en": "SP"}}
    assert roles[1].allow_all_entities is False


@pytest.mark.parametrize(
    "connections, message",
    [
        ({"1": "not-an-object"}, "must be an object"),
        ({"1": {"type": "saml20-sp"}}, "missing its entity id"),
        ({"1": {"name": "https://x", "type": "oidc"}}, "unsupported type"),
        ({"1": {"name": "https://x", "type": "saml20-sp", "metadata": []}}, "metadata must be an object"),
        ({"1": {"name": "https://x", "type": "saml20-sp", "metadata": ""}}, "metadata must be an object"),
        ({"1": {"name": "https://x", "type": "saml20-sp", "metadata": 0}}, "metadata must be an object"),
        (
            {
                "1": {"name": "https://x", "type": "saml20-sp"},
                "2": {"name": "https://x", "type": "saml20-sp"},
            },
            "more than once",
        ),
    ],
)
def test_assemble_roles_rejects_malformed_connections(connections, message):
    with pytest.raises(ValueError, match=message):
        assemble_roles(connections)


def test_same_entity_may_be_both_sp_and_idp():
    roles = assemble_roles({
        "1": {"name": "https://x", "type": "saml20-sp"},
        "2": {"name": "https://x", "type": "saml20-idp"},
    })
    assert len(roles) == 2


def test_synchronize_reports_changes():
    repository = InMemoryMetadataRepository()
    first = repository.synchronize([
        ServiceRole("https://a", "saml20-sp"),
        ServiceRole("https://b", "saml20-sp"),
    ])
    assert first.to_dict() == {
        "success": True,
        "created": ["https://a", "https://b"],
        "updated": [],
        "removed": [],
    }

    second = repository.synchronize([
        ServiceRole("https://a", "saml20-sp"),
        ServiceRole("https://b", "saml20-sp", metadata={"logo": "b.png"}),
        ServiceRole("https://c", "saml20-idp"),
    ])
    assert second.created == ["https://c"]
    assert second.updated == ["https://b"]
    assert second.removed == []

    third = repository.synchronize([ServiceRole("https://c", "saml20-idp")])
    assert third.removed == ["https://a", "https://b"]
    assert [role.entity_id for role in repository.find_all()] == ["https://c"]


def test_null_metadata_means_empty():
    roles = assemble_roles({"1": {"name": "https://x", "type": "saml20-sp", "metadata": None}})
    assert roles[0].metadata == {}
