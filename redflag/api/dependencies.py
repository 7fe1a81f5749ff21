"""Dependency injection for FastAPI endpoints"""

from typing import Any, Dict

from fastapi import Header, Request

from redflag.config import settings
from redflag.domain.expenses import SeverityThresholds
from redflag.infrastructure.clients.notifications import NotificationClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_user_id(x_user_id: str = Header("anonymous")) -> str:
    """Caller identity, resolved upstream by the auth gateway"""
    return x_user_id


def get_notification_client() -> NotificationClient:
    """Provide scan completion webhook client instance"""
    return NotificationClient()


def get_engine_options() -> Dict[str, Any]:
    """Analysis tuning passed through to build_report"""
    return {
        "threshold_percent": settings.revenue_threshold_percent,
        "detect_revenue_jumps": settings.revenue_jump_rule_enabled,
        "severity_thresholds": SeverityThresholds(
            high=settings.severity_high_threshold,
            medium=settings.severity_medium_threshold,
        ),
        "concentration_threshold": settings.concentration_threshold_percent,
    }
