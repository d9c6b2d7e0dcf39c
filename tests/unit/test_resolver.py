"""
Unit tests for cross-store relation stitching
"""

import pytest
from sqlalchemy import select
from models import Journalist
from services.resolver import (
    RELATION_KEYS,
    annotate_publications,
    attach_relations,
    group_links,
    linked_ids,
    resolve_journalist_relations,
)


class TestPureStitching:
    """In-memory re-attachment of nested collections"""

    def test_group_links_keeps_first_seen_order(self):
        grouped = group_links([(1, 10), (2, 20), (1, 11), (1, 10)])
        assert grouped == {1: [10, 11], 2: [20]}

    def test_linked_ids_are_unique_and_sorted(self):
        assert linked_ids({1: [3, 1], 2: [1, 2]}) == [1, 2, 3]

    def test_annotate_publications(self):
        publications = [{"id": 1, "name": "Herald"}, {"id": 2, "name": "Times"}]
        annotated = annotate_publications(
            publications,
            mediatype_rows=[(1, "Online"), (1, "Print")],
            tier_rows=[(2, "Tier 2")],
        )

        assert annotated[0] == {"id": 1, "name": "Herald", "mediatypes": ["Online", "Print"], "tiers": []}
        assert annotated[1] == {"id": 2, "name": "Times", "mediatypes": [], "tiers": ["Tier 2"]}
        assert "mediatypes" not in publications[0]

    def test_journalist_without_links_gets_empty_collections(self):
        journalists = [{"id": 1}, {"id": 2}]
        links = {"publications": {1: [7]}}
        entities = {"publications": [{"id": 7, "name": "Herald"}]}

        resolved = attach_relations(journalists, links, entities)

        assert resolved[0]["publications"] == [{"id": 7, "name": "Herald"}]
        for key in RELATION_KEYS:
            assert resolved[1][key] == []
        assert resolved[0]["regions"] == []

    def test_page_order_is_preserved(self):
        journalists = [{"id": 3}, {"id": 1}, {"id": 2}]
        resolved = attach_relations(journalists, {}, {})
        assert [item["id"] for item in resolved] == [3, 1, 2]


@pytest.mark.asyncio
async def test_resolve_journalist_relations(seeded, uuids):
    """Relations come from both stores and every collection is a list"""
    page_order = [uuids.ben, uuids.ana, uuids.cara]

    async with seeded.core.session() as core, seeded.mediamine.session() as mediamine:
        result = await mediamine.execute(select(Journalist).where(Journalist.uuid.in_(page_order)))
        by_uuid = {journalist.uuid: journalist for journalist in result.scalars().all()}
        page = [by_uuid[journalist_uuid] for journalist_uuid in page_order]

        resolved = await resolve_journalist_relations(core, mediamine, page)

    assert [item["uuid"] for item in resolved] == page_order

    ben, ana, cara = resolved
    assert ana["format_types"] == [{"id": 1, "uuid": uuids.print_format, "name": "Print"}]
    assert ana["publications"] == [{"id": 1, "name": "Herald", "mediatypes": ["Online"], "tiers": ["Tier 1"]}]
    assert ana["regions"] == [{"id": 1, "name": "Auckland"}]

    assert ben["publications"][0]["name"] == "Times"
    assert ben["publications"][0]["tiers"] == ["Tier 2"]
    assert ben["format_types"] == []

    for key in RELATION_KEYS:
        assert cara[key] == []


@pytest.mark.asyncio
async def test_resolve_restricts_mediatypes_and_tiers(seeded, uuids):
    async with seeded.core.session() as core, seeded.mediamine.session() as mediamine:
        result = await mediamine.execute(select(Journalist).where(Journalist.uuid == uuids.ben))
        resolved = await resolve_journalist_relations(
            core, mediamine, result.scalars().all(), mediatypes=["Online"], tiers=("Tier 1",)
        )

    publication = resolved[0]["publications"][0]
    assert publication["mediatypes"] == []
    assert publication["tiers"] == []


@pytest.mark.asyncio
async def test_resolve_empty_page(seeded):
    async with seeded.core.session() as core, seeded.mediamine.session() as mediamine:
        assert await resolve_journalist_relations(core, mediamine, []) == []
