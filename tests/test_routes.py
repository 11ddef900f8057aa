OPF = "openpetfoodfacts.org/api/v0/product/"
OFF = "openfoodfacts.org/api/v0/product/"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_ready(client):
    resp = client.get("/ready")
    assert resp.status_code == 200
    assert resp.json() == {"db": "ok"}


# ── Profile ──────────────────────────────────────────────────────────────────

def test_default_profile_is_seeded(client):
    resp = client.get("/profile")
    assert resp.status_code == 200
    assert resp.json() == {"pet_name": "My Dog", "allergens": ["chicken", "wheat"]}


def test_saved_empty_allergen_list_is_kept(client):
    client.put("/profile", json={"pet_name": "Rex", "allergens": []})
    assert client.get("/profile").json() == {"pet_name": "Rex", "allergens": []}


def test_put_profile_dedupes_and_persists(client):
    resp = client.put(
        "/profile",
        json={"pet_name": " Rex ", "allergens": ["Chicken", "chicken!", "", "Pea Protein"]},
    )
    assert resp.status_code == 200
    assert resp.json() == {"pet_name": "Rex", "allergens": ["Chicken", "Pea Protein"]}

    assert client.get("/profile").json() == resp.json()


def test_put_profile_replaces(client):
    client.put("/profile", json={"pet_name": "Rex", "allergens": ["beef"]})
    client.put("/profile", json={"pet_name": "", "allergens": ["lamb"]})
    assert client.get("/profile").json() == {"pet_name": "My Dog", "allergens": ["lamb"]}


# ── Lookup ───────────────────────────────────────────────────────────────────

def test_lookup_missing_barcode(client, upstream):
    resp = client.get("/api/lookup", params={"barcode": "abc"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing barcode"}


def test_lookup_not_found(client, upstream):
    resp = client.get("/api/lookup", params={"barcode": "0001-2"})
    assert resp.status_code == 404
    assert resp.json() == {"barcode": "00012", "source": "none"}


def test_lookup_found(client, upstream):
    upstream[OPF] = (200, {"product": {"product_name": "Kibble", "ingredients_text": "Beef"}})
    resp = client.get("/api/lookup", params={"barcode": "123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "openpetfoodfacts"
    assert body["barcode"] == "123"
    assert body["ingredients_text"] == "Beef"


# ── Check ────────────────────────────────────────────────────────────────────

def test_check_with_explicit_allergens(client):
    resp = client.post(
        "/api/check",
        json={
            "ingredients_text": "Chicken, Brown Rice, Pea Protein, Salt",
            "allergens": ["chicken", "pea protein"],
        },
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "verdict": "avoid",
        "hits": [
            {"allergen": "pea protein", "matched": "pea protein", "kind": "phrase"},
            {"allergen": "chicken", "matched": "chicken", "kind": "token"},
        ],
        "highlight_terms": ["pea protein", "chicken"],
    }


def test_check_falls_back_to_profile(client):
    client.put("/profile", json={"pet_name": "Rex", "allergens": ["dairy"]})
    resp = client.post("/api/check", json={"ingredients_text": "Milk, Wheat Flour"})
    body = resp.json()
    assert body["verdict"] == "avoid"
    assert body["hits"] == [{"allergen": "dairy", "matched": "milk", "kind": "token"}]


def test_check_without_text_is_unknown(client):
    resp = client.post("/api/check", json={"allergens": ["beef"]})
    assert resp.json() == {"verdict": "unknown", "hits": [], "highlight_terms": []}


def test_check_barcode_against_profile(client, upstream):
    client.put("/profile", json={"pet_name": "Rex", "allergens": ["beef"]})
    upstream[OPF] = (200, {"product": {"product_name": "Kibble", "ingredients_text": "Lamb, Rice"}})
    resp = client.get("/api/check/123")
    assert resp.status_code == 200
    body = resp.json()
    assert body["verdict"] == "safe"
    assert body["product"]["name"] == "Kibble"


def test_check_barcode_without_ingredients_is_unknown(client, upstream):
    upstream[OFF] = (200, {"product": {"product_name": "Mystery"}})
    resp = client.get("/api/check/123")
    assert resp.status_code == 200
    body = resp.json()
    assert body["verdict"] == "unknown"
    assert body["product"]["source"] == "openfoodfacts"


def test_check_barcode_not_found(client, upstream):
    resp = client.get("/api/check/555")
    assert resp.status_code == 404
    assert resp.json() == {"barcode": "555", "source": "none"}


def test_check_uses_seeded_allergens_before_profile_is_saved(client):
    resp = client.post("/api/check", json={"ingredients_text": "Wheat flour, rice"})
    body = resp.json()
    assert body["verdict"] == "avoid"
    assert body["hits"][0]["allergen"] == "wheat"


def test_check_non_english_text_is_unknown(client):
    resp = client.post(
        "/api/check",
        json={"ingredients_text": "Poulet, blé, maïs, sel", "allergens": ["chicken", "wheat", "corn"]},
    )
    assert resp.status_code == 200
    assert resp.json()["verdict"] == "unknown"


def test_check_barcode_non_english_listing_is_unknown(client, upstream):
    client.put("/profile", json={"pet_name": "Rex", "allergens": ["chicken"]})
    upstream[OPF] = (200, {"product": {"product_name": "Croquettes", "ingredients_text": "Poulet, riz, maïs"}})
    resp = client.get("/api/check/123")
    assert resp.status_code == 200
    assert resp.json()["verdict"] == "unknown"
