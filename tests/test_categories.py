from tests.factories import fake_category, fake_uuid

def test_create_category(client):
    payload = fake_category()

    res = client.post("/api/categories/", json=payload)
    assert res.status_code == 201
    assert res.json()["name"] == payload["name"]

def test_create_category_without_image(client):
    res = client.post("/api/categories/", json={"name": "Pickles"})
    assert res.status_code == 201
    assert res.json()["image"] == ""

def test_list_categories(client):
    client.post("/api/categories/", json=fake_category())
    res = client.get("/api/categories/")
    assert res.status_code == 200
    assert len(res.json()) == 1

def test_update_category(client):
    created = client.post("/api/categories/", json=fake_category()).json()

    res = client.put(f"/api/categories/{created['id']}", json={"name": "Sweets", "image": "/uploads/sweets.png"})
    assert res.status_code == 200
    assert res.json()["name"] == "Sweets"
    assert res.json()["image"] == "/uploads/sweets.png"

def test_update_missing_category(client):
    res = client.put(f"/api/categories/{fake_uuid()}", json={"name": "Sweets"})
    assert res.status_code == 404

def test_delete_category(client):
    created = client.post("/api/categories/", json=fake_category()).json()

    res = client.delete(f"/api/categories/{created['id']}")
    assert res.status_code == 200
    assert res.json()["message"] == "Category deleted successfully"

def test_delete_all_categories(client):
    client.post("/api/categories/", json=fake_category())
    client.post("/api/categories/", json=fake_category())

    res = client.delete("/api/categories/")
    assert res.status_code == 200
    assert client.get("/api/categories/").json() == []
