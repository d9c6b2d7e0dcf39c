"""
API tests for taxonomies and saved journalist searches/selections
"""

import pytest
from core.security import build_access_token


def reader_headers():
    return {"Authorization": f"Bearer {build_access_token(username='reader')}"}


class TestFormatType:

    @pytest.mark.asyncio
    async def test_list(self, client):
        data = (await client.get("/v2/format-type")).json()

        assert [item["name"] for item in data["items"]] == ["Print", "Radio"]
        assert data["total"] == 2
        assert data["marker"] == "0"

    @pytest.mark.asyncio
    async def test_name_filter_and_sort(self, client):
        data = (await client.get("/v2/format-type", params={"name": "rad"})).json()
        assert [item["name"] for item in data["items"]] == ["Radio"]

        data = (await client.get("/v2/format-type", params={"sort": "name:desc"})).json()
        assert [item["name"] for item in data["items"]] == ["Radio", "Print"]

    @pytest.mark.asyncio
    async def test_get_by_uuid(self, client, uuids):
        data = (await client.get(f"/v2/format-type/{uuids.print_format}")).json()
        assert data["format_type"]["name"] == "Print"

        response = await client.get("/v2/format-type/unknown")
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_create_and_update(self, client):
        created = (await client.post("/v2/format-type", json={"name": "Podcast"})).json()["format_type"]
        assert len(created["uuid"]) == 36

        updated = await client.put(
            f"/v2/format-type/{created['uuid']}", json={"name": "Podcast", "description": "Audio on demand"}
        )
        assert updated.json()["format_type"]["description"] == "Audio on demand"

    @pytest.mark.asyncio
    async def test_empty_name_is_400(self, client):
        response = await client.post("/v2/format-type", json={"name": ""})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_batch_create(self, client):
        response = await client.post("/v2/format-type/batch", json=[{"name": "TV"}, {"name": "Wire"}])
        assert response.json() == {"format_types": {"count": 2}}

        data = (await client.get("/v2/format-type")).json()
        assert data["total"] == 4

    @pytest.mark.asyncio
    async def test_delete_unlinks_journalists(self, client, uuids):
        response = await client.delete(f"/v2/format-type/{uuids.print_format}")
        assert response.json()["format_type"]["name"] == "Print"

        journalist = (await client.get(f"/v2/journalist/{uuids.ana}")).json()["journalist"]
        assert journalist["format_types"] == []


class TestNewsAndRoleTypes:

    @pytest.mark.asyncio
    async def test_news_type(self, client, uuids):
        data = (await client.get("/v2/news-type")).json()
        assert data["items"][0]["uuid"] == uuids.politics_news

        data = (await client.get(f"/v2/news-type/{uuids.politics_news}")).json()
        assert data["news_type"]["name"] == "Politics"

    @pytest.mark.asyncio
    async def test_role_type(self, client, uuids):
        response = await client.post("/v2/role-type/batch", json=[{"name": "Reporter"}])
        assert response.json() == {"role_types": {"count": 1}}

        response = await client.delete(f"/v2/role-type/{uuids.editor_role}")
        assert response.json()["role_type"]["name"] == "Editor"

        data = (await client.get("/v2/role-type")).json()
        assert [item["name"] for item in data["items"]] == ["Reporter"]


class TestJournalistSearch:
    """Saved searches belong to the user behind the token"""

    @pytest.mark.asyncio
    async def test_crud(self, client, uuids):
        created = await client.post("/v2/journalist-search", json={
            "name": "Politics desk",
            "search": {"newsTypeIds": [uuids.politics_news]},
            "journalists": [uuids.ana],
        })
        search = created.json()["journalist_search"]
        assert search["user_id"] == 1
        assert search["search"] == {"newsTypeIds": [uuids.politics_news]}

        data = (await client.get("/v2/journalist-search")).json()
        assert data["total"] == 1

        updated = await client.put(f"/v2/journalist-search/{search['uuid']}", json={"name": "Politics"})
        assert updated.json()["journalist_search"]["name"] == "Politics"
        assert updated.json()["journalist_search"]["search"] is None

        deleted = await client.delete(f"/v2/journalist-search/{search['uuid']}")
        assert deleted.json()["journalist_search"]["uuid"] == search["uuid"]
        assert (await client.get("/v2/journalist-search")).json()["items"] == []

    @pytest.mark.asyncio
    async def test_other_users_cannot_see_or_change(self, client):
        created = await client.post("/v2/journalist-search", json={"name": "Mine"})
        search_uuid = created.json()["journalist_search"]["uuid"]

        data = (await client.get("/v2/journalist-search", headers=reader_headers())).json()
        assert data == {"items": [], "total": 0}

        response = await client.get(f"/v2/journalist-search/{search_uuid}", headers=reader_headers())
        assert response.status_code == 500

        response = await client.delete(f"/v2/journalist-search/{search_uuid}", headers=reader_headers())
        assert response.status_code == 500

        assert (await client.get(f"/v2/journalist-search/{search_uuid}")).status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_user(self, client):
        headers = {"Authorization": f"Bearer {build_access_token(username='ghost')}"}
        response = await client.get("/v2/journalist-search", headers=headers)

        assert response.status_code == 500
        assert response.text.endswith("Unable to find user in database")


class TestJournalistSelect:

    @pytest.mark.asyncio
    async def test_create_gets_placeholder_names(self, client, uuids):
        response = await client.post("/v2/journalist-select", json={"ids": [uuids.ana, uuids.ben]})

        selection = response.json()["journalist_select"]
        assert selection["search"] == [uuids.ana, uuids.ben]
        assert len(selection["name"]) == 36
        assert len(selection["description"]) == 36
        assert selection["name"] != selection["description"]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, uuids):
        created = await client.post("/v2/journalist-select", json={"ids": [uuids.ana]})
        select_uuid = created.json()["journalist_select"]["uuid"]

        updated = await client.put(f"/v2/journalist-select/{select_uuid}", json={
            "name": "Shortlist",
            "description": "Launch contacts",
            "search": [uuids.ana, uuids.cara],
        })
        selection = updated.json()["journalist_select"]
        assert selection["name"] == "Shortlist"
        assert selection["search"] == [uuids.ana, uuids.cara]

        deleted = await client.delete(f"/v2/journalist-select/{select_uuid}")
        assert deleted.json()["journalist_select"]["name"] == "Shortlist"
        assert (await client.get(f"/v2/journalist-select/{select_uuid}")).status_code == 500

    @pytest.mark.asyncio
    async def test_scoped_to_owner(self, client, uuids):
        await client.post("/v2/journalist-select", json={"ids": [uuids.ana]})
        await client.post("/v2/journalist-select", json={"ids": [uuids.ben]}, headers=reader_headers())

        mine = (await client.get("/v2/journalist-select")).json()
        theirs = (await client.get("/v2/journalist-select", headers=reader_headers())).json()

        assert [item["search"] for item in mine["items"]] == [[uuids.ana]]
        assert [item["search"] for item in theirs["items"]] == [[uuids.ben]]
