"""Reporting API endpoints for the enquiry dashboard

This module provides the read-only report endpoints behind the sales
enquiry dashboard: enquiries over time, enquiries per product model,
per region and per catalog category, and enquiries against conversions.

Every endpoint accepts ``filter`` (``month`` or ``year``) and ``value``
query parameters. Some treat them as optional, others require them. All
report handlers delegate to service functions that contain the actual
business logic."""
