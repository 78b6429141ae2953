from datetime import date
from fastapi import status


HOLIDAY = {
    "name": "Harvest Fair",
    "start_date": "2024-01-10",
    "end_date": "2024-01-11",
    "reason": "Town harvest fair"
}


class TestHolidayManagement:
    """Test holiday endpoints (today is Monday 2024-01-08)"""

    def test_create_holiday(self, client, admin_headers):
        response = client.post("/admin/holidays", headers=admin_headers, json=HOLIDAY)
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Harvest Fair"
        assert data["start_date"] == "2024-01-10"
        assert data["end_date"] == "2024-01-11"

    def test_create_holiday_on_saturday(self, client, admin_headers):
        response = client.post(
            "/admin/holidays",
            headers=admin_headers,
            json={**HOLIDAY, "start_date": "2024-01-13", "end_date": "2024-01-13"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Weekends are already holidays"

    def test_create_holiday_in_past(self, client, admin_headers):
        response = client.post(
            "/admin/holidays",
            headers=admin_headers,
            json={**HOLIDAY, "start_date": "2024-01-05", "end_date": "2024-01-09"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "past_start"

    def test_create_holiday_missing_reason(self, client, admin_headers):
        payload = dict(HOLIDAY)
        del payload["reason"]
        response = client.post("/admin/holidays", headers=admin_headers, json=payload)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "missing_fields"

    def test_list_holidays_by_type(self, client, admin_headers, add_holiday):
        add_holiday(date(2024, 1, 2), date(2024, 1, 3), name="Past")
        add_holiday(date(2024, 1, 5), date(2024, 1, 8), name="Ending Today")
        add_holiday(date(2024, 2, 1), date(2024, 2, 1), name="Future")

        upcoming = client.get("/admin/holidays", headers=admin_headers).json()
        past = client.get("/admin/holidays?type=past", headers=admin_headers).json()
        every = client.get("/admin/holidays?type=all", headers=admin_headers).json()

        assert [h["name"] for h in upcoming] == ["Ending Today", "Future"]
        assert [h["name"] for h in past] == ["Past"]
        assert [h["name"] for h in every] == ["Past", "Ending Today", "Future"]

    def test_get_holiday(self, client, admin_headers, add_holiday):
        holiday = add_holiday(date(2024, 2, 1), date(2024, 2, 1))
        response = client.get(f"/admin/holidays/{holiday.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == holiday.id

    def test_update_holiday(self, client, admin_headers, add_holiday):
        holiday = add_holiday(date(2024, 2, 1), date(2024, 2, 1))
        response = client.put(
            f"/admin/holidays/{holiday.id}",
            headers=admin_headers,
            json={**HOLIDAY, "name": "Renamed"}
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["start_date"] == "2024-01-10"

    def test_update_past_holiday(self, client, admin_headers, add_holiday):
        holiday = add_holiday(date(2024, 1, 2), date(2024, 1, 3))
        response = client.put(f"/admin/holidays/{holiday.id}", headers=admin_headers, json=HOLIDAY)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Cannot edit past holidays"

    def test_update_to_past_start(self, client, admin_headers, add_holiday):
        holiday = add_holiday(date(2024, 2, 1), date(2024, 2, 1))
        response = client.put(
            f"/admin/holidays/{holiday.id}",
            headers=admin_headers,
            json={**HOLIDAY, "start_date": "2024-01-04"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "past_start"

    def test_update_missing_holiday(self, client, admin_headers):
        response = client.put("/admin/holidays/missing", headers=admin_headers, json=HOLIDAY)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_holiday(self, client, admin_headers, add_holiday):
        holiday = add_holiday(date(2024, 1, 2), date(2024, 1, 3))
        response = client.delete(f"/admin/holidays/{holiday.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_204_NO_CONTENT

        response = client.get(f"/admin/holidays/{holiday.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_employee_cannot_manage_holidays(self, client, employee_headers):
        response = client.post("/admin/holidays", headers=employee_headers, json=HOLIDAY)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_check_holiday(self, client, employee_headers, add_holiday):
        add_holiday(date(2024, 1, 10), date(2024, 1, 11), reason="Town harvest fair")

        hit = client.get("/holidays/check/2024-01-11", headers=employee_headers).json()
        miss = client.get("/holidays/check/2024-01-12", headers=employee_headers).json()

        assert hit["is_holiday"] is True
        assert hit["reason"] == "Town harvest fair"
        assert miss["is_holiday"] is False
