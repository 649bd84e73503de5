import pytest

from careerboard.models.taxonomy import CareerLocation


class TestTaxonomy:
    @pytest.mark.parametrize("prefix", ["categories", "locations", "types", "levels"])
    def test_create_and_list(self, client, prefix):
        api = f"/api/v1/{prefix}"
        client.post(api, json={"name": "Zeta", "sort_order": 2})
        r = client.post(api, json={"name": "Alpha One", "sort_order": 1})
        assert r.status_code == 201
        assert r.json()["slug"] == "alpha-one"
        names = [i["name"] for i in client.get(api).json()]
        assert names == ["Alpha One", "Zeta"]

    def test_active_only(self, client):
        client.post("/api/v1/levels", json={"name": "Junior"})
        client.post("/api/v1/levels", json={"name": "Retired Level", "is_active": False})
        names = [i["name"] for i in client.get("/api/v1/levels", params={"active_only": True}).json()]
        assert names == ["Junior"]

    def test_location_extras_are_stored(self, client, db):
        loc = client.post("/api/v1/locations", json={"name": "Remote", "is_remote": True, "icon": "x"}).json()
        assert db.get(CareerLocation, loc["id"]).is_remote is True

    def test_position_count_and_positions(self, client):
        cat = client.post("/api/v1/categories", json={"name": "Engineering"}).json()
        client.post("/api/v1/positions", json={"title": "Backend", "category_id": cat["id"]})
        listed = client.get("/api/v1/categories").json()
        assert listed[0]["position_count"] == 1
        positions = client.get(f"/api/v1/categories/{cat['id']}/positions").json()
        assert [p["title"] for p in positions] == ["Backend"]

    def test_update_and_delete(self, client):
        cat = client.post("/api/v1/types", json={"name": "Full Time"}).json()
        r = client.put(f"/api/v1/types/{cat['id']}", json={"name": "Full-time"})
        assert r.json()["name"] == "Full-time"
        assert client.delete(f"/api/v1/types/{cat['id']}").status_code == 200
        r = client.put(f"/api/v1/types/{cat['id']}", json={"name": "Again"})
        assert r.status_code == 404
        assert r.json()["detail"] == "Type not found"

    def test_deleting_category_detaches_positions(self, client):
        cat = client.post("/api/v1/categories", json={"name": "Ops"}).json()
        pos = client.post("/api/v1/positions", json={"title": "SRE", "category_id": cat["id"]}).json()
        client.delete(f"/api/v1/categories/{cat['id']}")
        assert client.get(f"/api/v1/positions/{pos['id']}").json()["category_id"] is None

    def test_duplicate_explicit_slug(self, client):
        client.post("/api/v1/categories", json={"name": "Design", "slug": "design"})
        r = client.post("/api/v1/categories", json={"name": "Design 2", "slug": "design"})
        assert r.status_code == 409

    def test_null_name_is_rejected(self, client):
        level = client.post("/api/v1/levels", json={"name": "Senior"}).json()
        r = client.put(f"/api/v1/levels/{level['id']}", json={"name": None, "years_min": None})
        assert r.status_code == 422

    def test_new_items_are_appended_to_the_order(self, client):
        first = client.post("/api/v1/categories", json={"name": "Zebra"}).json()
        second = client.post("/api/v1/categories", json={"name": "Aardvark"}).json()
        assert first["sort_order"] == 1
        assert second["sort_order"] == 2
        names = [i["name"] for i in client.get("/api/v1/categories").json()]
        assert names == ["Zebra", "Aardvark"]

    def test_explicit_sort_order_is_kept(self, client):
        client.post("/api/v1/types", json={"name": "Contract", "sort_order": 5})
        r = client.post("/api/v1/types", json={"name": "Internship", "sort_order": 0})
        assert r.json()["sort_order"] == 0
