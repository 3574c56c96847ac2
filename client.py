import requests
from typing import Any, Optional


class HeraclesClient:
    """Simple REST client for the workout API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        token: Optional[str] = None,
        session: Any = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        resp = self.session.request(
            method, f"{self.base_url}{path}", headers=headers, **kwargs
        )
        resp.raise_for_status()
        return resp.json()

    def login(self, email: str, password: str) -> dict:
        data = self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        self.token = data["token"]
        return data["user"]

    def register(self, email: str, name: str, password: str) -> dict:
        data = self._request(
            "POST",
            "/api/auth/register",
            json={"email": email, "name": name, "password": password},
        )
        self.token = data["token"]
        return data["user"]

    def list_exercises(self) -> list:
        return self._request("GET", "/api/exercises")

    def create_workout(self, payload: dict) -> int:
        return self._request("POST", "/api/workouts", json=payload)["workoutId"]

    def list_workouts(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        summary: bool = False,
    ) -> list:
        params = {"from": start_date, "to": end_date}
        params = {k: v for k, v in params.items() if v}
        if summary:
            params["summary"] = "1"
        return self._request("GET", "/api/workouts", params=params)

    def get_workout(self, workout_id: int) -> dict:
        return self._request("GET", f"/api/workouts/{workout_id}")

    def replace_workout(self, workout_id: int, payload: dict) -> None:
        self._request("PUT", f"/api/workouts/{workout_id}", json=payload)

    def delete_workout(self, workout_id: int) -> None:
        self._request("DELETE", f"/api/workouts/{workout_id}")

    def stats(self) -> dict:
        return self._request("GET", "/api/workouts/stats")

    def progression(self, exercise_id: int) -> dict:
        return self._request(
            "GET", "/api/workouts/stats/progression", params={"exerciseId": exercise_id}
        )
