# File: mail_augment/core/metrics.py
from prometheus_client import Counter, Histogram

GEMINI_API_DURATION_SECONDS = Histogram(
    "mail_augment_gemini_api_duration_seconds",
    "Duration of calls to the Gemini REST API.",
    ["model_name", "operation"],
    buckets=[0.1, 0.25, 0.5, 1, 2, 5, 10, 30]
)

GEMINI_API_ERRORS_TOTAL = Counter(
    "mail_augment_gemini_api_errors_total",
    "Total number of errors from the Gemini REST API.",
    ["model_name", "operation", "error_type"]
)

TEXTS_EMBEDDED_TOTAL = Counter(
    "mail_augment_texts_embedded_total",
    "Total number of texts sent for embedding.",
    ["kind"]
)

SUMMARIES_TOTAL = Counter(
    "mail_augment_summaries_total",
    "Total number of summaries returned, by how they were produced.",
    ["source"]
)

REQUEST_PROCESSING_DURATION_SECONDS = Histogram(
    "mail_augment_request_processing_duration_seconds",
    "Time taken to process an HTTP request.",
    ["method", "path"],
    buckets=[0.05, 0.1, 0.5, 1, 2, 5, 10, 30, 60]
)
