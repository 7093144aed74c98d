from conftest import API, auth_headers_for, make_user


def add_rx(client, headers, profile_id, **fields):
    body = {"profile_id": profile_id, "name": "Amoxicillin", "dosage": "500mg", "frequency": "every 8h"}
    body.update(fields)
    return client.post(f"{API}/prescriptions", json=body, headers=headers)


def test_create_prescription_defaults(client, auth_headers, profile):
    response = add_rx(client, auth_headers, profile.id, frequency=None)
    assert response.status_code == 422

    response = client.post(
        f"{API}/prescriptions", json={"profile_id": profile.id, "name": "Iron"}, headers=auth_headers
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["frequency"] == "daily"
    assert data["active"] is True
    assert data["start_date"]
    assert data["end_date"] is None


def test_blank_name_rejected(client, auth_headers, profile):
    assert add_rx(client, auth_headers, profile.id, name=" ").status_code == 422


def test_prescription_for_foreign_profile_is_not_found(client, db, profile):
    stranger = make_user(db, email="stranger@example.com")
    assert add_rx(client, auth_headers_for(stranger), profile.id).status_code == 404


def test_list_with_active_filter(client, auth_headers, profile):
    add_rx(client, auth_headers, profile.id, name="Old", active=False, start_date="2023-01-01T00:00:00Z")
    add_rx(client, auth_headers, profile.id, name="Current", start_date="2024-01-01T00:00:00Z")

    everything = client.get(f"{API}/prescriptions/profiles/{profile.id}", headers=auth_headers).json()
    assert [rx["name"] for rx in everything["data"]] == ["Current", "Old"]
    assert everything["meta"]["total"] == 2

    active = client.get(f"{API}/prescriptions/profiles/{profile.id}?active=true", headers=auth_headers).json()
    assert [rx["name"] for rx in active["data"]] == ["Current"]


def test_update_and_delete_prescription(client, auth_headers, profile):
    rx_id = add_rx(client, auth_headers, profile.id).json()["data"]["id"]

    response = client.patch(f"{API}/prescriptions/{rx_id}", json={"active": False}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["active"] is False

    assert client.delete(f"{API}/prescriptions/{rx_id}", headers=auth_headers).status_code == 204
    assert client.patch(f"{API}/prescriptions/{rx_id}", json={}, headers=auth_headers).status_code == 404


def test_null_for_required_field_is_rejected(client, auth_headers, profile):
    rx_id = add_rx(client, auth_headers, profile.id).json()["data"]["id"]

    for field in ("name", "frequency", "start_date", "active"):
        response = client.patch(f"{API}/prescriptions/{rx_id}", json={field: None}, headers=auth_headers)
        assert response.status_code == 422, field

    response = client.patch(f"{API}/prescriptions/{rx_id}", json={"end_date": None, "dosage": None}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["dosage"] is None
