import re

import pytest

CREATION_TIME = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$")


def _create(client, url, name="Laptop", brand="Dell"):
    response = client.post(url, json={"name": name, "brand": brand})
    assert response.status_code == 201, response.text
    return response.json()


def _set_state(client, url, device_id, state):
    response = client.patch(f"{url}/{device_id}", json={"state": state})
    assert response.status_code == 200, response.text
    return response.json()


def _assert_error_body(body, status, path):
    assert body["status"] == status
    assert body["path"] == path
    assert body["error"]
    assert body["message"]
    assert body["timestamp"]


def test_create_device(client, api_prefix):
    response = client.post(api_prefix, json={"name": "Laptop", "brand": "Dell"})

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Laptop"
    assert body["brand"] == "Dell"
    assert body["state"] == "AVAILABLE"
    assert isinstance(body["id"], int)
    assert CREATION_TIME.match(body["creationTime"])


def test_create_ignores_client_state_and_creation_time(client, api_prefix):
    response = client.post(
        api_prefix,
        json={"name": " Phone ", "brand": "Apple", "state": "IN_USE", "creationTime": "2000-01-01T00:00:00"},
    )

    body = response.json()
    assert response.status_code == 201
    assert body["name"] == "Phone"
    assert body["state"] == "AVAILABLE"
    assert body["creationTime"] != "2000-01-01T00:00:00"


def test_create_with_blank_name(client, api_prefix):
    response = client.post(api_prefix, json={"name": "", "brand": "Dell"})

    assert response.status_code == 400
    body = response.json()
    _assert_error_body(body, 400, api_prefix)
    assert body["error"] == "Bad Request"
    assert body["validationErrors"]["name"] == "Device name is required"


def test_create_with_missing_brand(client, api_prefix):
    response = client.post(api_prefix, json={"name": "Laptop", "brand": "   "})
    assert response.status_code == 400
    assert "brand" in response.json()["validationErrors"]

    response = client.post(api_prefix, json={"name": "Laptop"})
    assert response.status_code == 400
    assert "brand" in response.json()["validationErrors"]


def test_get_device(client, api_prefix):
    created = _create(client, api_prefix, name="Monitor")

    response = client.get(f"{api_prefix}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_device(client, api_prefix):
    response = client.get(f"{api_prefix}/999")

    assert response.status_code == 404
    body = response.json()
    _assert_error_body(body, 404, f"{api_prefix}/999")
    assert "999" in body["message"]
    assert "validationErrors" not in body


def test_get_with_non_numeric_id(client, api_prefix):
    response = client.get(f"{api_prefix}/abc")

    assert response.status_code == 400
    assert "device_id" in response.json()["validationErrors"]


@pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
@pytest.mark.parametrize("device_id", ["99999999999999999999", "0"])
def test_device_id_out_of_range(client, api_prefix, method, device_id):
    kwargs = {"json": {"name": "a", "brand": "b", "state": "AVAILABLE"}} if method in ("put", "patch") else {}

    response = getattr(client, method)(f"{api_prefix}/{device_id}", **kwargs)

    assert response.status_code == 400
    assert "device_id" in response.json()["validationErrors"]


def test_list_devices_pages(client, api_prefix):
    for name in ("Laptop", "Phone", "Tablet"):
        _create(client, api_prefix, name=name)

    first = client.get(api_prefix, params={"size": 2}).json()
    second = client.get(api_prefix, params={"size": 2, "page": 1}).json()

    assert [device["name"] for device in first["content"]] == ["Laptop", "Phone"]
    assert first["totalElements"] == 3
    assert first["totalPages"] == 2
    assert first["first"] is True and first["last"] is False
    assert [device["name"] for device in second["content"]] == ["Tablet"]
    assert second["last"] is True
    assert second["numberOfElements"] == 1


def test_list_devices_sorted(client, api_prefix):
    for name in ("b", "c", "a"):
        _create(client, api_prefix, name=name)

    body = client.get(api_prefix, params={"sort": "name,desc"}).json()

    assert [device["name"] for device in body["content"]] == ["c", "b", "a"]


@pytest.mark.parametrize(
    "params, field",
    [({"size": 0}, "size"), ({"size": 1000}, "size"), ({"page": -1}, "page"), ({"sort": "colour"}, "sort"), ({"sort": "name,up"}, "sort")],
)
def test_list_devices_rejects_bad_paging(client, api_prefix, params, field):
    response = client.get(api_prefix, params=params)

    assert response.status_code == 400
    assert field in response.json()["validationErrors"]


def test_list_by_brand_ignores_case(client, api_prefix):
    _create(client, api_prefix, name="Phone", brand="Samsung")
    _create(client, api_prefix, name="Tablet", brand="samsung")
    _create(client, api_prefix, name="Laptop", brand="Dell")

    lower = client.get(f"{api_prefix}/brand/samsung").json()
    upper = client.get(f"{api_prefix}/brand/SAMSUNG").json()

    assert lower["totalElements"] == 2
    assert lower["content"] == upper["content"]


def test_list_by_brand_does_not_trim(client, api_prefix):
    _create(client, api_prefix, brand="Dell")

    body = client.get(f"{api_prefix}/brand/%20Dell%20").json()

    assert body["totalElements"] == 0
    assert body["empty"] is True


def test_list_by_state(client, api_prefix):
    laptop = _create(client, api_prefix)
    _create(client, api_prefix, name="Phone")
    _set_state(client, api_prefix, laptop["id"], "IN_USE")

    available = client.get(f"{api_prefix}/state/AVAILABLE").json()
    in_use = client.get(f"{api_prefix}/state/in_use").json()

    assert [device["name"] for device in available["content"]] == ["Phone"]
    assert [device["id"] for device in in_use["content"]] == [laptop["id"]]


def test_list_by_unknown_state(client, api_prefix):
    response = client.get(f"{api_prefix}/state/BROKEN")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid device state: BROKEN"
    assert body["validationErrors"] == {"state": "Invalid device state: BROKEN"}


def test_full_update(client, api_prefix):
    created = _create(client, api_prefix)

    response = client.put(
        f"{api_prefix}/{created['id']}",
        json={"name": "Laptop Pro", "brand": "Dell", "state": "INACTIVE"},
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["name"], body["brand"], body["state"]) == ("Laptop Pro", "Dell", "INACTIVE")
    assert body["creationTime"] == created["creationTime"]


def test_full_update_identity_of_in_use_device(client, api_prefix):
    created = _create(client, api_prefix)
    _set_state(client, api_prefix, created["id"], "IN_USE")

    response = client.put(
        f"{api_prefix}/{created['id']}",
        json={"name": "Changed", "brand": "Dell", "state": "IN_USE"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot update name or brand of a device that is IN_USE"
    assert client.get(f"{api_prefix}/{created['id']}").json()["name"] == "Laptop"


def test_full_update_state_of_in_use_device(client, api_prefix):
    created = _create(client, api_prefix)
    _set_state(client, api_prefix, created["id"], "IN_USE")

    response = client.put(
        f"{api_prefix}/{created['id']}",
        json={"name": "Laptop", "brand": "Dell", "state": "AVAILABLE"},
    )

    assert response.status_code == 200
    assert response.json()["state"] == "AVAILABLE"


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"name": "Laptop", "brand": "Dell"}, "state"),
        ({"name": None, "brand": "Dell", "state": "AVAILABLE"}, "name"),
        ({"name": "Laptop", "brand": "Dell", "state": "BROKEN"}, "state"),
        ({"name": " ", "brand": "Dell", "state": "AVAILABLE"}, "name"),
    ],
)
def test_full_update_validation(client, api_prefix, payload, field):
    created = _create(client, api_prefix)

    response = client.put(f"{api_prefix}/{created['id']}", json=payload)

    assert response.status_code == 400
    assert field in response.json()["validationErrors"]


def test_full_update_missing_device(client, api_prefix):
    response = client.put(f"{api_prefix}/999", json={"name": "a", "brand": "b", "state": "AVAILABLE"})

    assert response.status_code == 404


def test_partial_update_state_only(client, api_prefix):
    created = _create(client, api_prefix)

    response = client.patch(f"{api_prefix}/{created['id']}", json={"state": "INACTIVE"})

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "INACTIVE"
    assert (body["name"], body["brand"]) == ("Laptop", "Dell")
    assert body["creationTime"] == created["creationTime"]


def test_partial_update_name_of_in_use_device(client, api_prefix):
    created = _create(client, api_prefix)
    _set_state(client, api_prefix, created["id"], "IN_USE")

    response = client.patch(f"{api_prefix}/{created['id']}", json={"name": "Laptop"})

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot update name or brand of a device that is IN_USE"


def test_partial_update_rejects_explicit_null(client, api_prefix):
    created = _create(client, api_prefix)

    response = client.patch(f"{api_prefix}/{created['id']}", json={"brand": None})

    assert response.status_code == 400
    assert response.json()["validationErrors"] == {"brand": "Device brand cannot be null"}


def test_partial_update_missing_device(client, api_prefix):
    response = client.patch(f"{api_prefix}/999", json={"state": "INACTIVE"})

    assert response.status_code == 404


def test_delete_device(client, api_prefix):
    created = _create(client, api_prefix)

    response = client.delete(f"{api_prefix}/{created['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"{api_prefix}/{created['id']}").status_code == 404


def test_delete_in_use_device(client, api_prefix):
    created = _create(client, api_prefix)
    _set_state(client, api_prefix, created["id"], "IN_USE")

    response = client.delete(f"{api_prefix}/{created['id']}")

    assert response.status_code == 400
    body = response.json()
    _assert_error_body(body, 400, f"{api_prefix}/{created['id']}")
    assert body["message"] == "Cannot delete a device that is IN_USE"
    assert client.get(f"{api_prefix}/{created['id']}").status_code == 200


def test_delete_missing_device(client, api_prefix):
    response = client.delete(f"{api_prefix}/999")

    assert response.status_code == 404


def test_creation_time_is_stable(client, api_prefix):
    created = _create(client, api_prefix)
    url = f"{api_prefix}/{created['id']}"

    client.put(url, json={"name": "Laptop 2", "brand": "Dell", "state": "INACTIVE", "creationTime": "1999-01-01T00:00:00"})
    client.patch(url, json={"brand": "Lenovo", "creationTime": "1999-01-01T00:00:00"})

    assert client.get(url).json()["creationTime"] == created["creationTime"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
