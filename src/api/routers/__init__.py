"""API routers."""

from api.routers import assessments, customers, notifications, ocr, prices

__all__ = ["ocr", "assessments", "customers", "prices", "notifications"]
