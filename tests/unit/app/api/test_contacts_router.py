"""HTTP tests for the contacts router across guest, user and administrator."""

import pytest
from fastapi.testclient import TestClient

from src.app.core.access import Role
from src.app.core.services import ContactService

NEW_CONTACT_FORM = {
    "firstname": "Jane",
    "lastname": "Doe",
    "email": "jane@example.com",
    "phones[0][phone_type]": "home",
    "phones[0][phone_number]": "785-555-0100",
    "phones[1][phone_type]": "work",
    "phones[1][phone_number]": "",
    "phones[2][phone_type]": "mobile",
    "phones[2][phone_number]": "785-555-0102",
}


@pytest.fixture(params=["admin_client", "user_client"])
def signed_in_client(request) -> TestClient:
    """Administrators and users have the same contact permissions."""
    return request.getfixturevalue(request.param)


def _location_id(response) -> str:
    return response.headers["location"].rsplit("/", 1)[-1]


class TestPublicPages:
    def test_index_lists_contacts_in_order(self, client: TestClient, contact_factory):
        contact_factory(firstname="John", lastname="Smith")
        contact_factory(firstname="Tim", lastname="Jones")

        response = client.get("/contacts")

        assert response.status_code == 200
        assert response.template.name == "contacts/index.html"
        assert [c.name for c in response.context["contacts"]] == ["Tim Jones", "John Smith"]
        assert response.context["current_role"] is Role.GUEST
        assert "Tim Jones" in response.text

    def test_index_filters_by_letter(self, client: TestClient, contact_factory):
        contact_factory(firstname="John", lastname="Smith")
        contact_factory(firstname="Tim", lastname="Jones")

        response = client.get("/contacts", params={"letter": "S"})

        assert [c.name for c in response.context["contacts"]] == ["John Smith"]
        assert response.context["letter"] == "S"

    def test_show_renders_requested_contact(self, client: TestClient, contact_factory):
        contact = contact_factory()

        response = client.get(f"/contacts/{contact.id}")

        assert response.status_code == 200
        assert response.template.name == "contacts/show.html"
        assert response.context["contact"] == contact
        assert "785-555-1234" in response.text

    def test_show_missing_contact_is_404(self, client: TestClient):
        response = client.get("/contacts/does-not-exist")

        assert response.status_code == 404
        assert response.template.name == "not_found.html"

    def test_root_redirects_to_index(self, client: TestClient):
        response = client.get("/", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/contacts"

    def test_guest_page_hides_write_links(self, client: TestClient, contact_factory):
        contact_factory()

        response = client.get("/contacts")

        assert "/contacts/new" not in response.text
        assert "_method=DELETE" not in response.text


class TestGuestAccess:
    def test_new_requires_login(self, client: TestClient):
        response = client.get("/contacts/new", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"

    def test_edit_requires_login(self, client: TestClient, contact_factory):
        contact = contact_factory()

        response = client.get(f"/contacts/{contact.id}/edit", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"

    def test_create_requires_login(self, client: TestClient, contact_service: ContactService):
        response = client.post("/contacts", data=NEW_CONTACT_FORM, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"
        assert contact_service.count() == 0

    def test_update_requires_login(
        self, client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory(firstname="Aaron")

        response = client.patch(
            f"/contacts/{contact.id}", data={"firstname": "Larry"}, follow_redirects=False
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"
        assert contact_service.get_contact(contact.id).firstname == "Aaron"

    def test_destroy_requires_login(
        self, client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory()

        response = client.delete(f"/contacts/{contact.id}", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"
        assert contact_service.count() == 1

    def test_missing_contact_still_asks_for_login(self, client: TestClient):
        response = client.delete("/contacts/does-not-exist", follow_redirects=False)

        assert response.status_code == 303


class TestSignedInAccess:
    def test_role_is_exposed_to_templates(self, admin_client: TestClient):
        response = admin_client.get("/contacts")

        assert response.context["current_role"] is Role.ADMINISTRATOR
        assert "/contacts/new" in response.text

    def test_user_role_is_exposed_to_templates(self, user_client: TestClient):
        response = user_client.get("/contacts")

        assert response.context["current_role"] is Role.USER

    def test_new_renders_blank_form(self, signed_in_client: TestClient):
        response = signed_in_client.get("/contacts/new")

        assert response.status_code == 200
        assert response.template.name == "contacts/new.html"
        form = response.context["form"]
        assert form.firstname == ""
        assert [p.phone_type for p in form.phones] == ["home", "work", "mobile"]

    def test_edit_renders_contact(self, signed_in_client: TestClient, contact_factory):
        contact = contact_factory()

        response = signed_in_client.get(f"/contacts/{contact.id}/edit")

        assert response.status_code == 200
        assert response.template.name == "contacts/edit.html"
        assert response.context["contact"] == contact
        assert response.context["form"].email == contact.email
        assert f"/contacts/{contact.id}?_method=PATCH" in response.text

    def test_edit_missing_contact_is_404(self, signed_in_client: TestClient):
        response = signed_in_client.get("/contacts/does-not-exist/edit")

        assert response.status_code == 404

    def test_create_from_form_redirects_to_new_contact(
        self, signed_in_client: TestClient, contact_service: ContactService
    ):
        response = signed_in_client.post(
            "/contacts", data=NEW_CONTACT_FORM, follow_redirects=False
        )

        assert response.status_code == 303
        assert contact_service.count() == 1
        contact = contact_service.get_contact(_location_id(response))
        assert contact.name == "Jane Doe"
        assert [(p.phone_type.value, p.phone_number) for p in contact.phones] == [
            ("home", "785-555-0100"),
            ("mobile", "785-555-0102"),
        ]

    def test_create_from_json(
        self, signed_in_client: TestClient, contact_service: ContactService
    ):
        response = signed_in_client.post(
            "/contacts",
            json={
                "firstname": "Aaron",
                "lastname": "Sumner",
                "email": "tester@example.com",
                "phones": [{"phone_number": "785-555-1234", "phone_type": "home"}],
            },
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert contact_service.get_contact(_location_id(response)).email == "tester@example.com"

    def test_create_invalid_rerenders_form(
        self, signed_in_client: TestClient, contact_service: ContactService
    ):
        response = signed_in_client.post(
            "/contacts", data={**NEW_CONTACT_FORM, "firstname": ""}
        )

        assert response.status_code == 422
        assert response.template.name == "contacts/new.html"
        assert response.context["errors"] == {"firstname": ["can't be blank"]}
        assert response.context["form"].email == "jane@example.com"
        assert contact_service.count() == 0

    def test_create_duplicate_email_is_rejected(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        existing = contact_factory()

        response = signed_in_client.post(
            "/contacts", data={**NEW_CONTACT_FORM, "email": existing.email}
        )

        assert response.status_code == 422
        assert response.context["errors"] == {"email": ["has already been taken"]}
        assert contact_service.count() == 1

    def test_malformed_json_is_rejected(self, signed_in_client: TestClient):
        response = signed_in_client.post(
            "/contacts",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 422

    def test_update_redirects_to_contact(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory(firstname="Aaron", lastname="Sumner")

        response = signed_in_client.patch(
            f"/contacts/{contact.id}",
            data={"firstname": "Larry", "lastname": "Smith"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == f"/contacts/{contact.id}"
        updated = contact_service.get_contact(contact.id)
        assert updated.name == "Larry Smith"
        assert updated.phones == contact.phones

    def test_update_with_put(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory()

        response = signed_in_client.put(
            f"/contacts/{contact.id}", json={"email": "new@example.com"}, follow_redirects=False
        )

        assert response.status_code == 303
        assert contact_service.get_contact(contact.id).email == "new@example.com"

    def test_update_invalid_rerenders_edit(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory(firstname="Aaron")

        response = signed_in_client.patch(
            f"/contacts/{contact.id}", data={"firstname": ""}
        )

        assert response.status_code == 422
        assert response.template.name == "contacts/edit.html"
        assert response.context["errors"] == {"firstname": ["can't be blank"]}
        assert response.context["form"].firstname == ""
        assert response.context["contact"] == contact
        assert contact_service.get_contact(contact.id).firstname == "Aaron"

    def test_update_edits_and_removes_phones(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory()
        home, work, mobile = contact.phones

        response = signed_in_client.patch(
            f"/contacts/{contact.id}",
            data={
                "phones[0][id]": home.id,
                "phones[0][phone_type]": "home",
                "phones[0][phone_number]": "913-555-0000",
                "phones[1][id]": work.id,
                "phones[1][phone_type]": "work",
                "phones[1][phone_number]": "",
            },
            follow_redirects=False,
        )

        assert response.status_code == 303
        phones = contact_service.get_contact(contact.id).phones
        assert [(p.id, p.phone_number) for p in phones] == [
            (home.id, "913-555-0000"),
            (mobile.id, mobile.phone_number),
        ]

    def test_partial_phone_entries_keep_unsupplied_fields(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory()
        home, work, mobile = contact.phones

        response = signed_in_client.patch(
            f"/contacts/{contact.id}",
            json={
                "phones": [
                    {"id": work.id, "phone_number": "913-555-7777"},
                    {"id": mobile.id, "phone_type": "work"},
                ]
            },
            follow_redirects=False,
        )

        assert response.status_code == 303
        phones = {p.id: p for p in contact_service.get_contact(contact.id).phones}
        assert set(phones) == {home.id, work.id, mobile.id}
        assert (phones[work.id].phone_type.value, phones[work.id].phone_number) == (
            "work",
            "913-555-7777",
        )
        assert (phones[mobile.id].phone_type.value, phones[mobile.id].phone_number) == (
            "work",
            mobile.phone_number,
        )

    def test_update_leaves_other_contacts_unchanged(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        target = contact_factory(firstname="Aaron")
        bystander = contact_factory(firstname="Jane")

        response = signed_in_client.patch(
            f"/contacts/{target.id}",
            data={
                "firstname": "Larry",
                "phones[0][id]": target.phones[0].id,
                "phones[0][phone_type]": "home",
                "phones[0][phone_number]": "913-555-0000",
                "phones[1][id]": target.phones[1].id,
                "phones[1][phone_type]": "work",
                "phones[1][phone_number]": "",
            },
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert contact_service.get_contact(target.id).firstname == "Larry"
        assert contact_service.get_contact(bystander.id) == bystander

    def test_update_missing_contact_is_404(self, signed_in_client: TestClient):
        response = signed_in_client.patch(
            "/contacts/does-not-exist", data={"firstname": "X"}
        )

        assert response.status_code == 404

    def test_destroy_redirects_to_index(
        self, signed_in_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory()

        response = signed_in_client.delete(
            f"/contacts/{contact.id}", follow_redirects=False
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/contacts"
        assert contact_service.count() == 0

    def test_destroy_missing_contact_is_404(self, signed_in_client: TestClient):
        response = signed_in_client.delete("/contacts/does-not-exist")

        assert response.status_code == 404


class TestHtmlFormMethodOverride:
    def test_post_with_patch_override_updates(
        self, admin_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory(firstname="Aaron")

        response = admin_client.post(
            f"/contacts/{contact.id}?_method=PATCH",
            data={"firstname": "Larry"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert contact_service.get_contact(contact.id).firstname == "Larry"

    def test_post_with_delete_override_destroys(
        self, admin_client: TestClient, contact_factory, contact_service: ContactService
    ):
        contact = contact_factory()

        response = admin_client.post(
            f"/contacts/{contact.id}?_method=delete", follow_redirects=False
        )

        assert response.status_code == 303
        assert contact_service.count() == 0

    def test_unsupported_override_is_ignored(self, admin_client: TestClient, contact_factory):
        contact = contact_factory()

        response = admin_client.post(f"/contacts/{contact.id}?_method=GET")

        assert response.status_code == 405
