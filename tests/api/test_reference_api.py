"""
API tests for /v1 reference data
"""

import pytest
from models import Country, Region


class TestCountry:

    @pytest.mark.asyncio
    async def test_lists_enabled_countries_by_name(self, client):
        response = await client.get("/v1/country")

        assert response.status_code == 200
        data = response.json()
        assert [item["name"] for item in data["items"]] == ["Australia", "New Zealand"]
        assert set(data["items"][0]) == {"id", "name", "code"}
        assert data["total"] == 2

    @pytest.mark.asyncio
    async def test_explicit_empty_name_matches_nothing(self, client):
        response = await client.get("/v1/country", params={"name": ""})
        assert response.json() == {"items": [], "total": 0}

    @pytest.mark.asyncio
    async def test_unnamed_countries_are_hidden(self, client, seeded):
        async with seeded.core.session() as core:
            core.add(Country(id=9, name="", code="XX", enabled=True))
            await core.commit()

        data = (await client.get("/v1/country")).json()
        assert [item["name"] for item in data["items"]] == ["Australia", "New Zealand"]

    @pytest.mark.asyncio
    async def test_crud(self, client):
        created = await client.post("/v1/country", json={"name": "Fiji", "code": "FJ"})
        assert created.status_code == 200
        country = created.json()["country"]
        assert country["id"] == 4

        updated = await client.put(f"/v1/country/{country['id']}", json={"name": "Fiji", "code": "FJ", "enabled": False})
        assert updated.json()["country"]["enabled"] is False

        deleted = await client.delete(f"/v1/country/{country['id']}")
        assert deleted.json()["country"]["name"] == "Fiji"

        missing = await client.get(f"/v1/country/{country['id']}")
        assert missing.status_code == 500
        assert missing.text.startswith(f"GET /v1/country/{country['id']} failed with")

    @pytest.mark.asyncio
    async def test_invalid_body_is_400(self, client):
        response = await client.post("/v1/country", json={"code": "FJ"})
        assert response.status_code == 400


class TestRegion:

    @pytest.mark.asyncio
    async def test_defaults_to_new_zealand(self, client):
        data = (await client.get("/v1/region")).json()
        assert data["items"] == [{"id": 1, "name": "Auckland", "country": {"name": "New Zealand"}}]

    @pytest.mark.asyncio
    async def test_empty_code_means_any_country(self, client):
        data = (await client.get("/v1/region", params={"code": ""})).json()
        assert [item["name"] for item in data["items"]] == ["Auckland", "Sydney"]

    @pytest.mark.asyncio
    async def test_unnamed_regions_are_hidden(self, client, seeded):
        async with seeded.core.session() as core:
            core.add(Region(id=9, name="", country_id=1))
            await core.commit()

        data = (await client.get("/v1/region")).json()
        assert [item["id"] for item in data["items"]] == [1]

    @pytest.mark.asyncio
    async def test_has_journalist(self, client):
        data = (await client.get("/v1/region", params={"code": "", "hasJournalist": "true"})).json()
        assert [item["id"] for item in data["items"]] == [1]

    @pytest.mark.asyncio
    async def test_batch(self, client):
        data = (await client.get("/v1/region/batch", params=[("ids[]", "2"), ("ids[]", "1")])).json()
        assert [item["id"] for item in data["items"]] == [1, 2]

    @pytest.mark.asyncio
    async def test_create_needs_existing_country(self, client):
        response = await client.post("/v1/region", json={"name": "Nowhere", "country_id": 99})
        assert response.status_code == 500

        response = await client.post("/v1/region", json={"name": "Wellington", "country_id": 1})
        assert response.json()["region"] == {"id": 3, "name": "Wellington", "country_id": 1}


class TestTag:

    @pytest.mark.asyncio
    async def test_list_echoes_marker_and_limit(self, client):
        data = (await client.get("/v1/tag", params={"marker": "1", "limit": "1"})).json()

        assert data["marker"] == "1"
        assert data["limit"] == "1"
        assert data["total"] == 3
        assert [item["name"] for item in data["items"]] == ["Tier 1"]

    @pytest.mark.asyncio
    async def test_sort(self, client):
        data = (await client.get("/v1/tag", params={"sort": "id:desc"})).json()
        assert [item["id"] for item in data["items"]] == [3, 2, 1]

        data = (await client.get("/v1/tag", params={"sort": "colour:desc"})).json()
        assert [item["name"] for item in data["items"]] == ["Politics", "Tier 1", "Tier 2"]

    @pytest.mark.asyncio
    async def test_related(self, client):
        data = (await client.get("/v1/tag/related/1")).json()
        assert data["items"] == [{"tag_id": 1, "related_tag_id": 2}]

    @pytest.mark.asyncio
    async def test_delete_removes_related_pairs(self, client):
        response = await client.delete("/v1/tag/2")
        assert response.status_code == 200

        data = (await client.get("/v1/tag/related/1")).json()
        assert data["items"] == []


class TestPublication:

    @pytest.mark.asyncio
    async def test_list_shape(self, client):
        data = (await client.get("/v1/publication")).json()

        assert [item["name"] for item in data["items"]] == ["Herald", "Post", "Times"]
        herald = data["items"][0]
        assert herald["region"] == {"name": "Auckland", "country": {"name": "New Zealand"}}
        assert herald["feed"] == [{"name": "Herald Latest", "broken_url": "N"}]
        assert data["items"][1]["region"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("marker,limit,expected", [
        ("0", "2", ["Herald", "Post"]),
        ("2", "2", ["Times"]),
        ("3", "2", []),
        ("x", "2", []),
    ])
    async def test_pagination(self, client, marker, limit, expected):
        data = (await client.get("/v1/publication", params={"marker": marker, "limit": limit})).json()

        assert [item["name"] for item in data["items"]] == expected
        assert data["total"] == 3

    @pytest.mark.asyncio
    async def test_sort_by_readership(self, client):
        data = (await client.get("/v1/publication", params={"sort": "readership: desc"})).json()
        assert [item["name"] for item in data["items"]] == ["Herald", "Times", "Post"]

    @pytest.mark.asyncio
    async def test_name_is_case_insensitive(self, client):
        data = (await client.get("/v1/publication", params={"name": "HER"})).json()
        assert [item["name"] for item in data["items"]] == ["Herald"]

    @pytest.mark.asyncio
    async def test_country_filter(self, client):
        data = (await client.get("/v1/publication", params={"country": "Australia"})).json()
        assert [item["name"] for item in data["items"]] == ["Times"]

    @pytest.mark.asyncio
    async def test_has_journalist(self, client):
        data = (await client.get("/v1/publication", params={"hasJournalist": "true"})).json()
        assert [item["name"] for item in data["items"]] == ["Herald", "Times"]

    @pytest.mark.asyncio
    async def test_batch(self, client):
        data = (await client.get("/v1/publication/batch", params=[("ids", "3"), ("ids", "1")])).json()
        assert [item["name"] for item in data["items"]] == ["Herald", "Post"]
        assert data["total"] == 2

    @pytest.mark.asyncio
    async def test_get_includes_links(self, client):
        data = (await client.get("/v1/publication/2")).json()

        assert data["publication"]["name"] == "Times"
        assert data["publication"]["region"]["country"] == {"id": 2, "name": "Australia"}
        assert sorted(link["tag"]["name"] for link in data["publication"]["publication_tag"]) == ["Politics", "Tier 2"]
        assert data["publication_country"] is None

    @pytest.mark.asyncio
    async def test_create_update_delete(self, client):
        created = await client.post("/v1/publication", json={
            "name": "Gazette",
            "url": "https://gazette.example",
            "domiciled_region_id": 1,
            "country_id": 1,
            "region_id": 1,
            "tags": [1, 3],
        })
        assert created.status_code == 200
        data = created.json()
        publication_id = data["publication"]["id"]
        assert publication_id == 4
        assert data["publication_country"] == {"publication_id": 4, "country_id": 1}
        assert data["publication_region"] == {"publication_id": 4, "region_id": 1}
        assert sorted(link["tag_id"] for link in data["publication"]["publication_tag"]) == [1, 3]

        updated = await client.put(f"/v1/publication/{publication_id}", json={
            "name": "Gazette Weekly",
            "country_id": 2,
            "tags": [2],
        })
        data = updated.json()
        assert data["publication"]["name"] == "Gazette Weekly"
        assert [link["tag_id"] for link in data["publication"]["publication_tag"]] == [2]
        assert data["publication_country"] == {"publication_id": 4, "country_id": 2}
        assert data["publication_region"] is None

        deleted = await client.delete(f"/v1/publication/{publication_id}")
        data = deleted.json()
        assert data["publication"]["name"] == "Gazette Weekly"
        assert data["publication_tag"] == {"count": 1}
        assert data["publication_country"] == {"count": 1}

        missing = await client.get(f"/v1/publication/{publication_id}")
        assert missing.status_code == 500

    @pytest.mark.asyncio
    async def test_media_types(self, client):
        data = (await client.get("/v1/publication-media-type")).json()
        assert data["items"] == [{"mediatype": "Online"}, {"mediatype": "Print"}]

        data = (await client.get("/v1/publication-media-type", params={"publicationIds": "2"})).json()
        assert data["items"] == [{"mediatype": "Print"}]

        data = (await client.get("/v1/publication-media-type", params={"name": ""})).json()
        assert data["items"] == []

    @pytest.mark.asyncio
    async def test_tiers(self, client):
        data = (await client.get("/v1/publication-tier")).json()
        assert [item["name"] for item in data["items"]] == ["Tier 1", "Tier 2"]


class TestFeed:

    @pytest.mark.asyncio
    async def test_list_filters(self, client):
        data = (await client.get("/v1/feed")).json()
        assert [item["name"] for item in data["items"]] == ["Herald Latest", "Times Politics"]
        assert data["items"][0]["publication"] == {"name": "Herald"}
        assert data["items"][0]["region"]["country"]["name"] == "New Zealand"

        data = (await client.get("/v1/feed", params={"broken_url": "true"})).json()
        assert [item["name"] for item in data["items"]] == ["Times Politics"]

        data = (await client.get("/v1/feed", params={"enabled": "true"})).json()
        assert [item["name"] for item in data["items"]] == ["Herald Latest"]

        data = (await client.get("/v1/feed", params={"publication": "Times"})).json()
        assert [item["name"] for item in data["items"]] == ["Times Politics"]

    @pytest.mark.asyncio
    async def test_create_update_delete(self, client):
        created = await client.post("/v1/feed", json={
            "name": "Herald Sport",
            "publication_id": 1,
            "region_id": 2,
            "tags": [3],
        })
        assert created.status_code == 200
        feed = created.json()["feed"]
        assert feed["id"] == 3
        assert feed["publication"] == {"id": 1, "name": "Herald"}
        assert feed["feed_region"] == [{"region": {"id": 2, "name": "Sydney"}}]
        assert feed["feed_tag"] == [{"tag": {"id": 3, "name": "Politics"}}]

        updated = await client.put("/v1/feed/3", json={
            "name": "Herald Sport",
            "publication_id": 1,
            "broken_url": "Y",
            "tags": [],
        })
        feed = updated.json()["feed"]
        assert feed["broken_url"] == "Y"
        assert feed["feed_region"] == []
        assert feed["feed_tag"] == []

        deleted = await client.delete("/v1/feed/3")
        assert deleted.json()["feed"]["name"] == "Herald Sport"
        assert (await client.get("/v1/feed/3")).status_code == 500

    @pytest.mark.asyncio
    async def test_broken_url_must_be_y_or_n(self, client):
        response = await client.post("/v1/feed", json={"name": "Bad", "publication_id": 1, "broken_url": "maybe"})
        assert response.status_code == 400
