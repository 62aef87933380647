"""
Library API: Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [Metrics] → [CORS] → Route Handler

    1. Request ID: correlation id for every log line of the request
    2. Logging: method, path, status and duration once the response is built
    3. Metrics: Prometheus counters and histograms, scraped at /metrics
    4. CORS: FastAPI's CORSMiddleware (answers preflight requests)
"""
