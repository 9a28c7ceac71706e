SEEDED_PASSWORDS = {
    "admin@smartcut.com": "admin123",
    "marcus@smartcut.com": "barber123",
    "john@example.com": "customer123",
}


def login(client, email, password=None):
    response = client.post(
        "/api/auth/login", json={"email": email, "password": password or SEEDED_PASSWORDS[email]}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def register(client, email, role="customer", password="secret123", name="Test User"):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name, "role": role},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


def book(client, headers, barber_id, service_id, when, notes=None):
    payload = {"barberId": barber_id, "serviceId": service_id, "appointmentDate": when}
    if notes:
        payload["notes"] = notes
    return client.post("/api/appointments", json=payload, headers=headers)
