import pytest


def _raise_dispute(client, api, user, order_id="ord-1", reason="Short delivery"):
    return client.post(
        api("/disputes"),
        json={"orderId": order_id, "reason": reason, "description": "Only 80kg arrived"},
        headers=user.headers,
    )


def test_create_dispute(client, api, buyer):
    res = _raise_dispute(client, api, buyer)
    assert res.status_code == 200
    dispute = res.json()["dispute"]
    assert dispute["id"].startswith("dispute-")
    assert dispute["status"] == "open"
    assert dispute["raisedBy"] == buyer.id
    assert dispute["raisedByName"] == "Buyer-1"


def test_create_dispute_requires_order_and_reason(client, api, buyer):
    res = client.post(api("/disputes"), json={"orderId": "ord-1"}, headers=buyer.headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Order ID and reason required"


def test_dispute_visibility(client, api, buyer, supplier, admin):
    _raise_dispute(client, api, buyer)
    _raise_dispute(client, api, supplier, order_id="ord-2")

    mine = client.get(api("/disputes"), headers=buyer.headers).json()["disputes"]
    assert [d["raisedBy"] for d in mine] == [buyer.id]

    everything = client.get(api("/disputes"), headers=admin.headers).json()["disputes"]
    assert len(everything) == 2


def test_only_admin_updates_dispute(client, api, buyer, admin):
    dispute = _raise_dispute(client, api, buyer).json()["dispute"]
    path = api(f"/disputes/{dispute['id']}")

    res = client.patch(path, json={"status": "resolved"}, headers=buyer.headers)
    assert res.status_code == 403
    assert res.json()["error"] == "Forbidden - admin only"

    res = client.patch(
        path,
        json={"status": "resolved", "resolution": "Refunded 20kg"},
        headers=admin.headers,
    )
    assert res.status_code == 200
    updated = res.json()["dispute"]
    assert updated["status"] == "resolved"
    assert updated["resolution"] == "Refunded 20kg"

    alerts = client.get(api("/notifications"), headers=buyer.headers).json()["notifications"]
    assert [n["type"] for n in alerts] == ["alert"]


def test_update_dispute_rejects_unknown_status(client, api, buyer, admin):
    dispute = _raise_dispute(client, api, buyer).json()["dispute"]
    res = client.patch(
        api(f"/disputes/{dispute['id']}"), json={"status": "escalated"}, headers=admin.headers
    )
    assert res.status_code == 400


def test_update_missing_dispute(client, api, admin):
    res = client.patch(api("/disputes/dispute-x"), json={"status": "rejected"}, headers=admin.headers)
    assert res.status_code == 404


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/admin/users"),
        ("patch", "/admin/users/buyer-1"),
        ("get", "/admin/listings"),
        ("get", "/admin/analytics"),
        ("post", "/admin/seed-mandi-rates"),
    ],
)
def test_admin_routes_forbidden_for_non_admin(client, api, buyer, method, path):
    kwargs = {"headers": buyer.headers}
    if method in ("patch", "post"):
        kwargs["json"] = {"role": "admin", "verified": True}
    res = getattr(client, method)(api(path), **kwargs)
    assert res.status_code == 403


@pytest.mark.parametrize("body", ["{not json", "[1, 2]", "{\"role\": 42}"])
def test_admin_user_update_forbidden_before_body_is_read(client, api, buyer, body):
    res = client.patch(
        api("/admin/users/buyer-1"),
        content=body,
        headers={**buyer.headers, "Content-Type": "application/json"},
    )
    assert res.status_code == 403
    assert res.json()["code"] == "forbidden"


def test_admin_user_update_rejects_malformed_body(client, api, admin, supplier):
    res = client.patch(
        api(f"/admin/users/{supplier.id}"),
        content="{not json",
        headers={**admin.headers, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["code"] == "validation_error"


def test_admin_routes_require_auth(client, api):
    assert client.get(api("/admin/users")).status_code == 401


def test_admin_lists_and_updates_users(client, api, admin, supplier):
    users = client.get(api("/admin/users"), headers=admin.headers).json()["users"]
    assert {u["id"] for u in users} == {admin.id, supplier.id}

    res = client.patch(
        api(f"/admin/users/{supplier.id}"), json={"verified": True}, headers=admin.headers
    )
    assert res.status_code == 200
    assert res.json()["user"]["verified"] is True
    assert res.json()["user"]["role"] == "supplier"

    missing = client.patch(api("/admin/users/ghost"), json={"verified": True}, headers=admin.headers)
    assert missing.status_code == 404


def test_admin_listings_include_every_status(client, api, admin, supplier, test_listing):
    client.put(
        api(f"/listings/{test_listing['id']}"), json={"status": "closed"}, headers=supplier.headers
    )
    listings = client.get(api("/admin/listings"), headers=admin.headers).json()["listings"]
    assert [item["status"] for item in listings] == ["closed"]


def test_admin_analytics(client, api, admin, supplier, buyer, test_listing):
    for quantity in (10, 5):
        client.post(
            api("/orders"),
            json={"listingId": test_listing["id"], "quantity": quantity},
            headers=buyer.headers,
        )
    client.post(
        api("/messages"), json={"receiverId": supplier.id, "content": "hi"}, headers=buyer.headers
    )

    res = client.get(api("/admin/analytics"), headers=admin.headers)
    assert res.status_code == 200
    analytics = res.json()["analytics"]
    assert analytics["totalUsers"] == 3
    assert analytics["totalSuppliers"] == 1
    assert analytics["totalBuyers"] == 1
    assert analytics["totalAdmins"] == 1
    assert analytics["totalListings"] == 1
    assert analytics["activeListings"] == 1
    assert analytics["totalOrders"] == 2
    assert analytics["totalRevenue"] == 300
    assert analytics["totalMessages"] == 1
    assert analytics["ordersByStatus"] == {"inquiry": 2}
    assert [o["quantity"] for o in analytics["recentOrders"]] == [5, 10]
