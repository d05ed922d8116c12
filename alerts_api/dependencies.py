"""FastAPI dependencies."""

from fastapi import Request

from alerts_api.services import Services


def get_services(request: Request) -> Services:
    """Services built during application startup."""
    return request.app.state.services
