#!/usr/bin/env python3
"""
End-to-end smoke test for a running eldercare API.

Registers a throwaway account, creates a patient, walks every
patient-scoped list endpoint plus the health probes, prints a summary and
exits non-zero on any failure.

    BASE_URL=http://127.0.0.1:8080 python api_smoke_test.py
"""
import os
import sys
import time
import uuid
from dataclasses import dataclass

from dotenv import load_dotenv

from care.client import ApiError, ElderCareClient

load_dotenv()

BASE_URL = os.getenv("BASE_URL") or f"http://127.0.0.1:{os.getenv('PORT', '8000')}"

RESOURCES = [
    "medications", "appointments", "vitals", "emergency-contacts", "checkins",
    "messages", "documents", "activities", "reminders", "invoices",
]


@dataclass
class TestResult:
    success: bool
    name: str
    response_time: float
    error_message: str = ""


class SmokeTester:
    def __init__(self, base_url: str):
        self.client = ElderCareClient(base_url)
        self.results = []

    def check(self, name, fn):
        start = time.time()
        try:
            value = fn()
        except (ApiError, AssertionError, OSError) as exc:
            self.results.append(TestResult(False, name, time.time() - start, str(exc)))
            print(f"FAIL {name}: {exc}")
            return None
        self.results.append(TestResult(True, name, time.time() - start))
        print(f"ok   {name} ({time.time() - start:.2f}s)")
        return value

    def run(self) -> bool:
        self.check("healthz", lambda: _expect(self.client.healthz() == "ok", "healthz not ok"))
        self.check("readyz", lambda: _expect(self.client.readyz() == (200, "ready"), "readyz not ready"))

        email = f"smoke-{uuid.uuid4().hex[:10]}@example.com"
        if self.check("register", lambda: self.client.register(email, "smoke-pass-123", "Smoke", "Test")) is None:
            return self.summary()
        self.check("login", lambda: self.client.login(email, "smoke-pass-123"))
        self.check("me", self.client.me)

        patient = self.check("create patient", lambda: self.client.create_patient("Smoke", "Patient"))
        if patient is None:
            return self.summary()
        pid = patient["id"]
        for resource in RESOURCES:
            self.check(f"list {resource}", lambda r=resource: self.client.list(r, pid))
        self.check("list appointments (SPA path)", lambda: self.client.list_appointments(pid))
        self.check("send message", lambda: self.client.send_message(pid, "smoke test"))
        return self.summary()

    def summary(self) -> bool:
        failed = [r for r in self.results if not r.success]
        print(f"\n{len(self.results) - len(failed)}/{len(self.results)} checks passed against {BASE_URL}")
        for r in failed:
            print(f"  - {r.name}: {r.error_message}")
        return not failed


def _expect(cond, message):
    assert cond, message


if __name__ == "__main__":
    sys.exit(0 if SmokeTester(BASE_URL).run() else 1)
