import pytest

pytestmark = pytest.mark.integration


def test_get_or_create_returns_same_id(store):
    first = store.get_or_create_tag("Trabalho")
    second = store.get_or_create_tag("Trabalho")

    assert first == second
    assert [tag.name for tag in store.list_tags()] == ["Trabalho"]


def test_default_and_custom_color(store):
    store.get_or_create_tag("Hobby")
    store.get_or_create_tag("Academia", "#FF2D55")
    # Color only applies on creation
    store.get_or_create_tag("Academia", "#000000")

    colors = {tag.name: tag.color for tag in store.list_tags()}
    assert colors == {"Academia": "#FF2D55", "Hobby": "#CCCCCC"}


def test_entries_reuse_existing_tags(store):
    tag_id = store.get_or_create_tag("Família")
    store.create_entry({"mood_names": ["Calmo"], "tag_names": ["Família", "Leitura"]})

    tags = {tag.name: tag.id for tag in store.list_tags()}
    assert tags["Família"] == tag_id
    assert set(tags) == {"Família", "Leitura"}


def test_tags_listed_by_name(store):
    for name in ["Reunião", "Academia", "Hobby"]:
        store.get_or_create_tag(name)

    assert [tag.name for tag in store.list_tags()] == ["Academia", "Hobby", "Reunião"]


@pytest.mark.parametrize("name", ["", "   ", "\t"])
def test_blank_tag_names_are_rejected(store, name):
    with pytest.raises(ValueError):
        store.get_or_create_tag(name)

    assert store.list_tags() == []


def test_tag_names_match_exactly(store):
    padded = store.get_or_create_tag(" Casa")
    entry = store.create_entry({"mood_names": ["Calmo"], "tag_names": [" Casa", "casa"]})

    assert entry.tag_names == [" Casa", "casa"]
    tags = {tag.name: tag.id for tag in store.list_tags()}
    assert tags == {" Casa": padded, "casa": tags["casa"]}
    assert len(tags) == 2
