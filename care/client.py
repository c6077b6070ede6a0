"""
HTTP client for the eldercare API.

Mirrors the calls the single-page front end makes: the bearer token is
kept after register/login and attached to every request, and a 401
clears it so the caller knows to sign in again.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A non-2xx response; ``body`` holds the decoded JSON (or text)."""

    def __init__(self, status: int, body: Any):
        self.status = status
        self.body = body
        message = body
        if isinstance(body, dict) and isinstance(body.get('error'), dict):
            message = body['error'].get('message')
        super().__init__(f"{status}: {message}")


class ElderCareClient:
    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 15.0):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers['Content-Type'] = 'application/json'

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = {}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        resp = self.session.request(method, f'{self.base_url}{path}', json=json,
                                    headers=headers, timeout=self.timeout)
        if resp.status_code == 401:
            self.token = None
        if resp.status_code == 204:
            return None
        try:
            body = resp.json()
        except ValueError:
            body = resp.text
        if not resp.ok:
            logger.debug('%s %s -> %s', method, path, resp.status_code)
            raise ApiError(resp.status_code, body)
        return body

    # Auth
    def register(self, email: str, password: str, first_name: str = '', last_name: str = '',
                 role: Optional[str] = None) -> dict:
        payload = {'email': email, 'password': password, 'firstName': first_name, 'lastName': last_name}
        if role:
            payload['role'] = role
        data = self._request('POST', '/api/auth/register', payload)
        self.token = data['token']
        return data['user']

    def login(self, email: str, password: str) -> dict:
        data = self._request('POST', '/api/auth/login', {'email': email, 'password': password})
        self.token = data['token']
        return data['user']

    def me(self) -> dict:
        return self._request('GET', '/api/auth/me')['user']

    # Patients and records
    def create_patient(self, first_name: str, last_name: str = '', **extra) -> dict:
        return self._request('POST', '/api/patients',
                             {'first_name': first_name, 'last_name': last_name, **extra})

    def list(self, resource: str, patient_id: str) -> list:
        return self._request('GET', f'/api/patients/{patient_id}/{resource}')

    def send_message(self, patient_id: str, message: str) -> dict:
        return self._request('POST', f'/api/patients/{patient_id}/messages', {'message': message})

    def log_medication(self, medication_id: str, taken_at: Optional[str] = None,
                       notes: Optional[str] = None) -> dict:
        payload = {}
        if taken_at:
            payload['takenAt'] = taken_at
        if notes:
            payload['notes'] = notes
        return self._request('POST', f'/api/medications/{medication_id}/log', payload)

    def update_activity(self, activity_id: str, completed: bool) -> dict:
        return self._request('PUT', f'/api/activities/{activity_id}', {'completed': completed})

    def update_reminder(self, reminder_id: str, completed: bool) -> dict:
        return self._request('PUT', f'/api/reminders/{reminder_id}', {'completed': completed})

    # Appointments
    def list_appointments(self, patient_id: str) -> list:
        return self._request('GET', f'/api/appointments/{patient_id}')

    def create_appointment(self, patient_id: str, **fields) -> dict:
        return self._request('POST', '/api/appointments', {'patient_id': patient_id, **fields})

    def update_appointment(self, appointment_id: str, **fields) -> dict:
        return self._request('PUT', f'/api/appointments/{appointment_id}', fields)

    def cancel_appointment(self, appointment_id: str) -> dict:
        return self._request('PATCH', f'/api/appointments/{appointment_id}/cancel')

    def delete_appointment(self, appointment_id: str) -> None:
        self._request('DELETE', f'/api/appointments/{appointment_id}')

    # Probes
    def healthz(self) -> str:
        resp = self.session.get(f'{self.base_url}/healthz', timeout=self.timeout)
        return resp.text

    def readyz(self) -> tuple[int, str]:
        resp = self.session.get(f'{self.base_url}/readyz', timeout=self.timeout)
        return resp.status_code, resp.text
