"""
Prefect flows for the report pipeline.

Flows:
- report: Fetch a region page, aggregate season totals, render site/index.html

Usage (local):
    python -m bird_trends.flows.report
    bird-trends report --region US-NY-109 --start-year 2000 --end-year 2020

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m bird_trends.flows.report
"""
