def test_screen_services_grouped_by_category(client):
    response = client.get("/screen-services")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalServices"] == 3
    assert data["totalCategories"] == 2

    camera, lighting = data["categories"]
    assert (camera["slug"], camera["serviceCount"]) == ("camera-hire", 2)
    assert (lighting["slug"], lighting["serviceCount"]) == ("lighting-grip", 2)

    panavision = next(s for s in data["services"] if s["id"] == 1)
    assert panavision["slug"] == "panavision"
    assert panavision["logoUrl"] == "https://blob.test/container/L000001?sv=2024&sig=abc"
    assert [c["slug"] for c in panavision["categories"]] == ["camera-hire", "lighting-grip"]


def test_category_services_sorted_by_name(client):
    response = client.get("/screen-services/Lighting-Grip")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["category"] == {"id": 20, "name": "Lighting & Grip", "slug": "lighting-grip"}
    assert [s["name"] for s in data["services"]] == ["Éclair Lights", "Panavision"]
    assert data["serviceCount"] == 2

    eclair = data["services"][0]
    assert eclair["slug"] == "clair-lights"
    assert eclair["logoUrl"] is None
    assert eclair["websiteUrl"] is None
    assert "categories" not in eclair


def test_unknown_category(client):
    response = client.get("/screen-services/catering")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Category not found"}
