"""Core application for the eldercare backend.

This package contains models, serializers, services, views and route
registrations implementing the patient-scoped API consumed by the
front-end application.
"""
