from __future__ import annotations

from prometheus_client import Counter, Histogram

weather_provider_requests_total = Counter(
    "weather_provider_requests_total",
    "Total weather provider requests",
    labelnames=["provider"],
)

weather_provider_errors_total = Counter(
    "weather_provider_errors_total",
    "Total weather provider request errors",
    labelnames=["provider", "error_type"],
)

weather_provider_latency_seconds = Histogram(
    "weather_provider_latency_seconds",
    "Latency of weather provider requests",
    labelnames=["provider"],
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30),
)

widget_page_requests_total = Counter(
    "widget_page_requests_total",
    "Inbound requests answered by the widget server",
)

widget_request_faults_total = Counter(
    "widget_request_faults_total",
    "Inbound requests that raised inside the request boundary",
    labelnames=["error_type"],
)
